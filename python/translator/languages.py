LANGUAGES = [
    "Python", "JavaScript", "TypeScript", "Java", "C#", "Go", "Rust", "C++", "PHP", "Swift"
]

DEFAULT_INPUT_LANG = "JavaScript"
DEFAULT_OUTPUT_LANG = "Python"


def find_language(name: str):
    """대소문자 구분 없이 목록에서 언어를 찾습니다. 없으면 None."""
    if not name:
        return None
    lowered = name.strip().lower()
    for lang in LANGUAGES:
        if lang.lower() == lowered:
            return lang
    return None
