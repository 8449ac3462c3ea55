"""Bilingual (English / Persian) rule tables for the lost & found chatbot.

Every list here is plain data: the classifier and the search ranker only do
containment checks against these phrases, so new wording can be added without
touching control flow.
"""

ITEM_TYPE_LOST = "lost"
ITEM_TYPE_FOUND = "found"
ITEM_TYPES = (ITEM_TYPE_LOST, ITEM_TYPE_FOUND)

EN_STOPWORDS = frozenset([
    "a", "an", "and", "are", "as", "at", "be", "but", "by", "can", "cant", "could", "did", "do", "does", "doing",
    "for", "from", "had", "has", "have", "having", "how", "i", "im", "in", "into", "is", "it", "its", "me", "my",
    "of", "on", "or", "our", "ours", "please", "pls", "the", "their", "them", "then", "there", "they", "this", "to",
    "was", "we", "were", "what", "where", "when", "who", "why", "with", "you", "your", "yours",
])

FA_STOPWORDS = frozenset([
    "و", "یا", "اما", "که", "این", "اون", "آن", "هم", "همه", "یک", "یه", "را", "رو", "به", "در", "از", "برای", "با",
    "من", "تو", "شما", "ما", "او", "ایشان", "هست", "هستم", "هستی", "هستید", "هستیم", "بود", "بودم", "بودیم",
    "کردم", "کرد", "کردی", "کردید", "کردیم", "می", "میشه", "میتونم", "میتونید", "چطور", "چگونه", "کجا", "چی",
    "لطفا", "لطفاً", "خواهش", "خواهشاً",
])

STOPWORDS = EN_STOPWORDS | FA_STOPWORDS

# 사용자가 "앱 사용법"을 묻는 표현 (아이템 단어보다 우선)
FEATURE_HINTS = {
    "en": ["help", "feature", "features", "map", "add item", "post"],
    "fa": ["راهنما", "امکانات", "نقشه", "ثبت", "چطور", "چگونه"],
}

# 분실/습득 서술 표현
LOST_FOUND_HINTS = {
    "en": ["lost", "missing", "i lost", "i have lost", "left my", "where is", "found", "i found"],
    "fa": ["گم", "گمشده", "گم کردم", "جا گذاشتم", "پیدا کردم", "پیدا شد", "پیداش کردم"],
}

# "I lost X" -> FOUND 게시물을 찾아야 함
LOST_SIDE_HINTS = {
    "en": ["lost", "missing"],
    "fa": ["گم", "گمشده", "جا گذاشتم"],
}

# "I found X" -> LOST 게시물을 찾아야 함
FOUND_SIDE_HINTS = {
    "en": ["found"],
    "fa": ["پیدا کردم", "پیدا شد", "پیداش کردم"],
}

ITEM_WORDS = {
    "en": [
        "wallet", "card", "phone", "laptop", "keys", "key", "bag", "backpack", "charger", "earbuds", "airpods",
        "id", "student card", "bank card", "watch", "bottle", "umbrella",
    ],
    "fa": [
        "کیف", "کوله", "گوشی", "لپتاپ", "کلید", "کارت", "شارژر", "هندزفری", "ایرپاد", "ساعت", "بطری", "چتر",
        "کارت دانشجویی", "کارت بانکی", "عینک",
    ],
}

# 기본 태그 어휘 (seed_tags 스크립트에서 사용)
DEFAULT_TAGS = [
    {"tid": 1, "tagname": "wallet", "color": "#f59e0b"},
    {"tid": 2, "tagname": "phone", "color": "#3b82f6"},
    {"tid": 3, "tagname": "keys", "color": "#10b981"},
    {"tid": 4, "tagname": "bag", "color": "#8b5cf6"},
    {"tid": 5, "tagname": "clothes", "color": "#ef4444"},
]

SEARCH_EMPTY_REPLY = (
    "چیزی شبیه توضیحت پیدا نکردم 😕\n"
    "می‌تونی کلمات دقیق‌تر بگی، یا از لیست/نقشه جستجو کنی، یا یک پست جدید ثبت کنی."
)
SEARCH_RESULTS_REPLY = "این موارد ممکنه مرتبط باشن (برای دیدن جزئیات روی هر مورد کلیک کن):"

# /chatbot/search 전용 (짧은 문구)
DIRECT_SEARCH_EMPTY_REPLY = "مورد مرتبطی پیدا نشد. اگر ممکنه توضیح دقیق‌تری بده یا از نقشه/لیست جستجو کن."
DIRECT_SEARCH_RESULTS_REPLY = "این موارد ممکنه مرتبط باشن:"

ITEM_LINK_TEMPLATE = "/items/{id}"
SNIPPET_ELLIPSIS = "…"


def all_phrases(table: dict) -> list:
    """Flatten a {language: [phrases]} table, keeping language order."""
    out = []
    for phrases in table.values():
        out.extend(phrases)
    return out
