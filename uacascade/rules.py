"""Правила нормализации результатов разбора.

Каждая таблица — упорядоченный список пар (условие, преобразование) над
словарём полей. Применяется первое сработавшее правило.
"""

from .catalog import CHROME_PATTERN

QIHU_PREFIX = 'QIHU 360'

# Windows NT -> маркетинговая версия, сравнение по префиксу
WINDOWS_VERSIONS = [
    ('10.0', '10'),
    ('6.3', '8.1'),
    ('6.2', '8'),
    ('6.1', '7'),
    ('6.0', 'Vista'),
    ('5.2', 'XP'),
    ('5.1', 'XP'),
    ('5.0', '2000'),
]


def windows_version(nt_version):
    for prefix, name in WINDOWS_VERSIONS:
        if nt_version.startswith(prefix):
            return name
    return 'Unknown'


def apply_rules(rules, fields):
    """Применяет первое подходящее правило; True, если что-то сработало"""
    for predicate, transform in rules:
        if predicate(fields):
            transform(fields)
            return True
    return False


def _field_is(key, value):
    return lambda fields: fields[key] == value


def _rename(key, value):
    def transform(fields):
        fields[key] = value
    return transform


# --- ОС ---

def _windows(fields):
    fields['os'] = 'Windows'
    fields['os_version'] = windows_version(fields['os_version'])


def _apple(name):
    def transform(fields):
        fields['os'] = name
        fields['os_version'] = fields['os_version'].replace('_', '.')
    return transform


OS_RULES = [
    (_field_is('os', 'Windows NT'), _windows),
    (_field_is('os', 'Mac OS X'), _apple('macOS')),
    (_field_is('os', 'iPhone OS'), _apple('iOS')),
]


# --- Браузеры ---

def _chrome_behind_safari(fields):
    # Chromium-браузеры добавляют токен Safari, сам по себе он ненадёжен
    match = CHROME_PATTERN.search(fields['user_agent'])
    if match:
        fields['browser'] = 'Chrome'
        fields['browser_version'] = match.group(1)


def _is_qihu(fields):
    return fields['browser'].startswith(QIHU_PREFIX)


def _qihu(fields):
    fields['browser_version'] = fields['browser'][len(QIHU_PREFIX):].strip()
    fields['browser'] = '360'


def _uos_professional(fields):
    fields['browser'] = 'UOS'
    fields['browser_version'] = 'Professional'


BROWSER_RULES = [
    (_field_is('browser', 'OPR'), _rename('browser', 'Opera')),
    (_field_is('browser', 'Edg'), _rename('browser', 'Edge')),
    (_field_is('browser', 'MetaSr'), _rename('browser', 'Sogou')),
    (_field_is('browser', 'MSIE'), _rename('browser', 'IE')),
    (_field_is('browser', 'Safari'), _chrome_behind_safari),
    (_is_qihu, _qihu),
    (_field_is('browser', 'UOS Professional'), _uos_professional),
]


def normalize_os(fields):
    return apply_rules(OS_RULES, fields)


def normalize_browser(fields):
    return apply_rules(BROWSER_RULES, fields)
