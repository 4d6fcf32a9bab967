"""Visual separators for phase banners in the log output."""

from typing import Final


class LogStyle:
    DOUBLE: Final[str] = "═" * 80
    LIGHT: Final[str] = "─" * 80

    @staticmethod
    def banner(title: str) -> str:
        return f"\n{LogStyle.DOUBLE}\n{title:^80}\n{LogStyle.DOUBLE}"
