"""Вложенное представление дерева документов.

Список документов, отсортированный по пути, уже идёт в прямом порядке обхода,
поэтому дерево собирается одним проходом без рекурсии и без сортировки.
"""

import logging
from typing import Iterable, Iterator, List, Tuple

from docstore.domains.documents.entities import Document

logger = logging.getLogger(__name__)


class DocumentTreeNode:
    def __init__(self, document: Document, children: List["DocumentTreeNode"] = None):
        self.document = document
        self.children = children if children is not None else []

    def __repr__(self) -> str:
        return f"DocumentTreeNode({self.document.path}, children={len(self.children)})"


def build_tree(documents: Iterable[Document]) -> List[DocumentTreeNode]:
    """Сборка корней дерева из списка в порядке путей"""
    roots: List[DocumentTreeNode] = []
    nodes = {}

    for document in documents:
        node = DocumentTreeNode(document)
        nodes[document.id] = node

        if document.parent_id is None:
            roots.append(node)
            continue

        parent = nodes.get(document.parent_id)
        if parent is None:
            # Родитель должен идти раньше; если нет, список не в порядке путей
            logger.warning(
                f"Document {document.id} listed before its parent {document.parent_id}, "
                "attaching it as a root"
            )
            roots.append(node)
        else:
            parent.children.append(node)

    return roots


def walk_tree(nodes: Iterable[DocumentTreeNode], depth: int = 0) -> Iterator[Tuple[int, Document]]:
    """Плоский обход дерева с глубиной для отображения с отступами"""
    for node in nodes:
        yield depth, node.document
        yield from walk_tree(node.children, depth + 1)
