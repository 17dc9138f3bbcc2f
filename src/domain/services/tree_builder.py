# -*- coding: utf-8 -*-
"""
Domain Service: сборка деревьев из плоской выборки.

Рубрики (parent → children) и ветки комментариев (parent → replies)
собираются в памяти за два прохода по id-словарю, без рекурсивных
запросов к БД.
"""

from dataclasses import asdict
from typing import Dict, List, Optional, Sequence

from src.domain.entities.category import Category
from src.domain.entities.comment import Comment
from src.domain.read_models import CategoryNode, CommentNode


def _closes_cycle(node_id: int, parent_id: int, parent_of: Dict[int, Optional[int]]) -> bool:
    """Станет ли node_id своим же предком, если повесить его на parent_id."""
    seen = set()
    current: Optional[int] = parent_id
    while current is not None and current not in seen:
        if current == node_id:
            return True
        seen.add(current)
        current = parent_of.get(current)
    return False


def build_category_tree(categories: Sequence[Category]) -> List[CategoryNode]:
    """
    Собрать дерево рубрик.

    Первый проход создаёт узлы, второй раскладывает их по родителям.
    Рубрика, чей родитель отсутствует в выборке, становится корнем.
    Ссылка на родителя, замыкающая цикл, игнорируется (рубрика тоже
    становится корнем). Порядок входа сохраняется в каждом списке.

    Аргументы:
        categories: Плоский упорядоченный список рубрик

    Возвращает:
        Список корневых узлов
    """
    nodes: Dict[int, CategoryNode] = {}
    for category in categories:
        nodes[category.id] = CategoryNode(**asdict(category))

    roots: List[CategoryNode] = []
    attached_parent: Dict[int, Optional[int]] = {}

    for category in categories:
        node = nodes[category.id]
        parent = nodes.get(category.parent_id) if category.parent_id is not None else None

        if parent is None or _closes_cycle(node.id, parent.id, attached_parent):
            attached_parent[node.id] = None
            roots.append(node)
            continue

        attached_parent[node.id] = parent.id
        parent.children.append(node)

    return roots


def build_comment_threads(
    parents: Sequence[Comment],
    replies: Sequence[Comment]
) -> List[CommentNode]:
    """
    Прикрепить ответы к комментариям страницы.

    Ответ попадает в дерево, только если его предок в итоге
    принадлежит странице: пагинация идёт по верхнему уровню, ответы
    на комментарии с других страниц не подтягиваются. Глубина
    вложенности не ограничена.

    Аргументы:
        parents: Комментарии верхнего уровня (страница)
        replies: Ответы той же статьи, по возрастанию даты

    Возвращает:
        Узлы страницы в исходном порядке
    """
    page = [CommentNode(**asdict(comment)) for comment in parents]
    reply_nodes = [CommentNode(**asdict(reply)) for reply in replies]

    by_id: Dict[int, CommentNode] = {node.id: node for node in page}
    for node in reply_nodes:
        by_id.setdefault(node.id, node)

    for node in reply_nodes:
        parent = by_id.get(node.parent_id)
        if parent is not None and parent is not node:
            parent.replies.append(node)

    # Узлы, не достижимые от страницы, просто не выводятся
    return page
