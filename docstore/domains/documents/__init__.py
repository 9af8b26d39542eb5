from docstore.domains.documents.entities import Document
from docstore.domains.documents.paths import PathKey, SEPARATOR
from docstore.domains.documents.slugs import slugify
from docstore.domains.documents.tree import DocumentTreeNode, build_tree, walk_tree

# DocumentService импортируется из services напрямую: он зависит от репозиториев,
# которые сами импортируют сущности этого пакета
__all__ = [
    "Document", "PathKey", "SEPARATOR", "slugify",
    "DocumentTreeNode", "build_tree", "walk_tree"
]
