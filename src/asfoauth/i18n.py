"""User facing message templates."""
from __future__ import annotations
from typing import Dict

DEFAULT_LOCALE = "en"

STRINGS: Dict[str, Dict[str, str]] = {
    "en": {
        "BotNotFound": "Couldn't find any bot named {0}!",
    },
    "zh-CN": {
        "BotNotFound": "找不到任何名为 {0} 的机器人实例！",
    },
}


class Localizer:
    def __init__(self, locale: str = DEFAULT_LOCALE):
        self.locale = (locale or DEFAULT_LOCALE).replace("_", "-").strip().lower()

    def template(self, key: str) -> str:
        # exact locale first, then any table sharing the language ("zh-tw" -> "zh-CN")
        language = self.locale.split("-")[0]
        for name, table in STRINGS.items():
            if name.lower() == self.locale and key in table:
                return table[key]
        for name, table in STRINGS.items():
            if name.split("-")[0].lower() == language and key in table:
                return table[key]
        return STRINGS[DEFAULT_LOCALE][key]

    def bot_not_found(self, bot_name: str) -> str:
        return self.template("BotNotFound").format(bot_name)
