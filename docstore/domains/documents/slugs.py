SLUG_SEPARATOR = "_"
MAX_SLUG_LENGTH = 100


def slugify(title: str) -> str:
    """Генерация URL-безопасного слага из заголовка.

    Буквы и цифры (включая не латинские) сохраняются в нижнем регистре,
    любая другая последовательность символов заменяется одним ``_``.
    Коллизии слагов не проверяются: за уникальность пути отвечает сервис.

        >>> slugify("API Design: v2!")
        'api_design_v2'
    """
    words = "".join(ch if ch.isalnum() else " " for ch in title.lower()).split()
    slug = SLUG_SEPARATOR.join(words)
    return slug[:MAX_SLUG_LENGTH].strip(SLUG_SEPARATOR)
