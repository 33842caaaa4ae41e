import re

_NON_ALNUM = re.compile(r'[\W_]+')


def slugify(text: str) -> str:
    """
    convert a name to a url slug: lowercase, runs of non-alphanumerics become
    one hyphen, no leading/trailing hyphens

    letters outside ascii (cyrillic names) are kept as they are
    """
    text = (text or '').lower().strip()
    text = _NON_ALNUM.sub('-', text)
    return text.strip('-')
