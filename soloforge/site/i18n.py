from __future__ import annotations

from typing import Dict, Optional

from soloforge.site.routing import DEFAULT_LOCALE, normalize_locale

MESSAGES: Dict[str, Dict[str, Dict[str, str]]] = {
    "en": {
        "common": {
            "appName": "SoloForge",
            "slogan": "The Forge for Solo Makers' Products",
        },
        "nav": {
            "home": "Home",
            "products": "Products",
            "leaderboard": "Leaderboard",
            "pricing": "Pricing",
            "submit": "Submit",
            "developer": "Developer Center",
            "profile": "Profile",
            "about": "About",
            "feedback": "Feedback",
        },
        "pages": {
            "about": "About",
            "terms": "Terms of Service",
            "privacy": "Privacy Policy",
            "feedback": "Feedback",
        },
        "pricing": {
            "title": "Pricing",
            "subtitle": "Promote your product to makers and early adopters",
        },
        "leaderboard": {
            "title": "Leaderboard",
            "subtitle": "The most popular products from solo makers",
        },
        "auth": {
            "redirecting": "Redirecting...",
        },
    },
    "zh": {
        "common": {
            "appName": "SoloForge",
            "slogan": "独立开发者的产品锻造坊",
        },
        "nav": {
            "home": "首页",
            "products": "产品",
            "leaderboard": "排行榜",
            "pricing": "定价",
            "submit": "提交产品",
            "developer": "开发者中心",
            "profile": "个人资料",
            "about": "关于",
            "feedback": "反馈",
        },
        "pages": {
            "about": "关于",
            "terms": "服务条款",
            "privacy": "隐私政策",
            "feedback": "反馈",
        },
        "pricing": {
            "title": "定价",
            "subtitle": "把你的产品推荐给独立开发者与早期用户",
        },
        "leaderboard": {
            "title": "排行榜",
            "subtitle": "最受欢迎的独立开发者产品",
        },
        "auth": {
            "redirecting": "正在跳转...",
        },
    },
}


def _lookup(locale: str, namespace: str, key: str) -> Optional[str]:
    ns = MESSAGES.get(locale, {}).get(namespace, {})
    value = ns.get(key)
    return value if isinstance(value, str) else None


def translate(locale: str, namespace: str, key: str) -> str:
    """
    Resolve `namespace.key` for a locale.

    Falls back to the default locale, then to the dotted key itself.
    """
    loc = normalize_locale(locale)
    return _lookup(loc, namespace, key) or _lookup(DEFAULT_LOCALE, namespace, key) or f"{namespace}.{key}"


class Translator:
    """`t("key")` bound to one locale + namespace, mirroring how page code reads."""

    def __init__(self, locale: str, namespace: str) -> None:
        self.locale = normalize_locale(locale)
        self.namespace = namespace

    def __call__(self, key: str) -> str:
        return translate(self.locale, self.namespace, key)


def get_translations(locale: str, namespace: str) -> Translator:
    return Translator(locale, namespace)
