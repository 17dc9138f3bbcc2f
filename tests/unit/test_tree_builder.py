"""
Unit tests для сборки деревьев рубрик и веток комментариев.
"""

from src.domain.entities.category import Category
from src.domain.entities.comment import Comment
from src.domain.services.tree_builder import build_category_tree, build_comment_threads


def category(id, parent_id=None, name=None):
    return Category(id=id, name=name or f"c{id}", slug=f"c{id}", parent_id=parent_id)


def comment(id, parent_id=None, article_id=1):
    return Comment(id=id, article_id=article_id, parent_id=parent_id, author_name="Karim", content=f"#{id}")


def test_category_tree_nests_children_in_order():
    roots = build_category_tree([category(1), category(2, 1), category(3), category(4, 1)])

    assert [node.id for node in roots] == [1, 3]
    assert [child.id for child in roots[0].children] == [2, 4]
    assert roots[1].children == []


def test_category_with_missing_parent_is_root():
    """Тест: родитель вне выборки (например, неактивный) → корень."""
    roots = build_category_tree([category(5, parent_id=99)])

    assert [node.id for node in roots] == [5]


def test_category_cycle_is_broken():
    roots = build_category_tree([category(1, parent_id=2), category(2, parent_id=1)])

    assert [node.id for node in roots] == [2]
    assert [child.id for child in roots[0].children] == [1]


def test_category_deep_tree():
    roots = build_category_tree([category(1), category(2, 1), category(3, 2)])

    assert roots[0].children[0].children[0].id == 3


def test_comment_threads_attach_replies_oldest_first():
    page = [comment(10), comment(11)]
    replies = [comment(20, parent_id=10), comment(21, parent_id=10), comment(22, parent_id=11)]

    threads = build_comment_threads(page, replies)

    assert [node.id for node in threads] == [10, 11]
    assert [reply.id for reply in threads[0].replies] == [20, 21]
    assert [reply.id for reply in threads[1].replies] == [22]


def test_comment_threads_any_depth():
    threads = build_comment_threads([comment(1)], [comment(2, 1), comment(3, 2), comment(4, 3)])

    assert threads[0].replies[0].replies[0].replies[0].id == 4


def test_replies_to_other_pages_are_dropped():
    """Тест: ответ на комментарий с другой страницы не попадает в выдачу."""
    threads = build_comment_threads([comment(1)], [comment(2, parent_id=50), comment(3, parent_id=2)])

    assert threads[0].replies == []


def test_empty_page():
    assert build_comment_threads([], [comment(2, 1)]) == []
