from dataclasses import dataclass, asdict

DESKTOP = 'Desktop'
MOBILE = 'Mobile'
SPIDER = 'Spider'
BOT = 'Bot'
OTHER = 'Other'

DEVICE_TYPES = (DESKTOP, MOBILE, SPIDER, BOT, OTHER)

CSV_HEADER = ('Browser', 'BrowserVersion', 'OS', 'OSVersion', 'DeviceType')


@dataclass(frozen=True)
class ClientInfo:
    """Результат разбора User-Agent"""

    browser: str = OTHER
    browser_version: str = ''
    os: str = OTHER
    os_version: str = ''
    # Desktop, Mobile, Spider, Bot, Other
    device_type: str = OTHER
    # Исходная строка без изменений
    user_agent: str = ''

    def as_dict(self):
        return asdict(self)

    def to_row(self):
        """Колонки в порядке CSV_HEADER"""
        return [self.browser, self.browser_version, self.os, self.os_version, self.device_type]
