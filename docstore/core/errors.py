"""Ошибки домена документов.

Обработчики HTTP переводят их в коды ответа, сервис никогда не повторяет
операцию сам: повтор означает запуск всей операции заново.
"""


class DocumentError(Exception):
    """Базовая ошибка домена документов"""

    default_message = "Document error"

    def __init__(self, message: str = None):
        self.message = message or self.default_message
        super().__init__(self.message)


class NotFoundError(DocumentError):
    default_message = "Resource not found"


class ValidationError(DocumentError, ValueError):
    default_message = "Validation error"


class InvalidSegmentError(ValidationError):
    default_message = "Invalid path segment"


class ConflictError(DocumentError):
    default_message = "A document with this path already exists"


class ForbiddenError(DocumentError, PermissionError):
    default_message = "Access denied"


class StorageError(DocumentError):
    default_message = "Storage error"
