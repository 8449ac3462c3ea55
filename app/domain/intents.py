"""Static intent definitions for the chatbot.

Registration order matters: the classifier keeps the first intent that reaches
the best score, so earlier entries win ties.
"""
from __future__ import annotations
from dataclasses import dataclass
from typing import Tuple

INTENT_GREETING = "greeting"
INTENT_HELP = "help"
INTENT_SEARCH_ITEMS = "search_items"
INTENT_FALLBACK = "fallback"


@dataclass(frozen=True)
class Intent:
    name: str
    examples: Tuple[str, ...]
    response: str


INTENTS: Tuple[Intent, ...] = (
    Intent(
        name=INTENT_GREETING,
        examples=("hello", "hi", "hey", "good morning", "سلام", "درود", "سلام خوبی", "وقت بخیر"),
        response=(
            "سلام! من دستیار Lost & Found هستم 🙂\n"
            "می‌تونی بپرسی «راهنما» یا «امکانات»، یا وسیله‌ات رو توصیف کنی تا موارد مشابه رو پیشنهاد بدم."
        ),
    ),
    Intent(
        name="thanks",
        examples=("thanks", "thank you", "thx", "مرسی", "ممنون", "ممنونم", "سپاس", "دستت درد نکنه"),
        response="خواهش می‌کنم! اگر سوال دیگه‌ای داشتی در خدمتم 🌱",
    ),
    Intent(
        name="goodbye",
        examples=("bye", "goodbye", "see you", "خداحافظ", "فعلا", "بای"),
        response="خداحافظ! امیدوارم وسیله‌ات زود پیدا بشه 🍀",
    ),
    Intent(
        name=INTENT_HELP,
        examples=(
            "help", "features", "what can you do", "how does this app work",
            "راهنما", "امکانات", "چه کارهایی میتونی انجام بدی", "این سایت چطور کار میکنه",
        ),
        response=(
            "امکانات سایت:\n"
            "• ثبت آگهی گمشده یا پیداشده با عکس، برچسب و موقعیت روی نقشه\n"
            "• مرور و جستجوی آگهی‌ها در لیست یا روی نقشه\n"
            "• نوشتن نظر زیر هر آگهی و گزارش نظرهای نامناسب\n"
            "• اینجا هم می‌تونی وسیله‌ات رو توصیف کنی تا موارد مشابه رو پیشنهاد بدم."
        ),
    ),
    Intent(
        name="how_to_post",
        examples=(
            "how to add item", "add item", "post an item", "create a post", "report lost item",
            "ثبت آگهی", "چطور آگهی ثبت کنم", "ثبت وسیله گمشده", "پست جدید",
        ),
        response=(
            "برای ثبت آگهی وارد حساب کاربری شو، روی «Add Item» بزن، نوع (گمشده/پیداشده)، عنوان، توضیحات، "
            "برچسب‌ها و محل روی نقشه رو مشخص کن و در صورت امکان عکس اضافه کن."
        ),
    ),
    Intent(
        name="map",
        examples=("map", "show map", "where on map", "location", "نقشه", "نمایش نقشه", "موقعیت", "مکان آگهی"),
        response="در صفحه هر آگهی دکمه «نقشه» رو بزن تا محل گم شدن یا پیدا شدن وسیله روی نقشه نمایش داده بشه.",
    ),
    Intent(
        name="comments",
        examples=("comment", "comments", "write a comment", "reply to post", "نظر", "کامنت", "نظر بدم", "نوشتن نظر"),
        response="زیر هر آگهی می‌تونی نظر بنویسی؛ برای این کار باید وارد حساب کاربری شده باشی.",
    ),
    Intent(
        name="report",
        examples=("report comment", "report abuse", "spam", "inappropriate", "گزارش", "گزارش نظر", "تخلف", "اسپم"),
        response="اگر نظری نامناسب بود، دکمه «گزارش» کنارش رو بزن؛ نظرهایی که چند بار گزارش بشن برای بررسی پنهان می‌شن.",
    ),
    Intent(
        name="account",
        examples=(
            "register", "sign up", "login", "verification code", "otp", "verify email",
            "ثبت نام", "ورود", "کد تایید", "تایید ایمیل",
        ),
        response=(
            "برای ثبت‌نام ایمیل دانشگاهی‌ات رو وارد کن؛ یک کد تایید (OTP) برات ایمیل می‌شه. "
            "بعد از وارد کردن کد، حسابت فعال می‌شه و می‌تونی وارد بشی."
        ),
    ),
    Intent(
        name=INTENT_SEARCH_ITEMS,
        examples=("search items", "find my item", "search", "جستجو", "جستجوی وسیله", "دنبال وسیله‌ام میگردم"),
        response="وسیله‌ات رو با چند کلمه توصیف کن (مثلاً «کیف پول مشکی نزدیک کتابخانه») تا موارد مشابه رو پیدا کنم.",
    ),
    Intent(
        name=INTENT_FALLBACK,
        examples=(),
        response=(
            "متوجه نشدم 🤔\n"
            "می‌تونی «راهنما» رو بپرسی، یا وسیله‌ای که گم کردی/پیدا کردی رو توصیف کنی."
        ),
    ),
)


def find_intent(intents: Tuple[Intent, ...], name: str) -> Intent | None:
    return next((i for i in intents if i.name == name), None)
