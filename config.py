import copy
import yaml
from pathlib import Path

DEFAULT_CONFIG = {
    "parser": {
        "spider_detection": True,
        # None — встроенные каталоги uacascade.catalog
        "browser_identifiers": None,
        "os_identifiers": None
    },
    "report": {
        "format": "csv"
    }
}


def merge_config(base, override):
    """Вливает override в base на месте.

    Вложенные секции сливаются по ключам, остальные значения (в том числе
    списки идентификаторов) заменяются целиком.
    """
    for key, value in override.items():
        section = base.get(key)
        if isinstance(value, dict) and isinstance(section, dict):
            merge_config(section, value)
        elif isinstance(value, dict):
            base[key] = merge_config({}, value)
        else:
            base[key] = value
    return base


class Config:
    def __init__(self, config_path=None):
        self.config = copy.deepcopy(DEFAULT_CONFIG)
        if config_path:
            self.load(config_path)

    def load(self, config_path):
        path = Path(config_path)
        if not path.is_file():
            print(f"Конфигурация {path} не найдена, используются значения по умолчанию")
            return

        try:
            overrides = yaml.safe_load(path.read_text(encoding='utf-8'))
        except (OSError, yaml.YAMLError) as e:
            print(f"Ошибка при загрузке конфигурации {path}: {e}")
            return

        if overrides is None:
            overrides = {}
        if not isinstance(overrides, dict):
            print(f"Ошибка при загрузке конфигурации {path}: "
                  f"ожидался словарь секций, получено {type(overrides).__name__}")
            return

        merge_config(self.config, overrides)
        print(f"Конфигурация загружена из {path}")

    def get(self, path, default=None):
        """Значение по пути вида "parser.spider_detection"; None считается отсутствием"""
        node = self.config
        for key in path.split('.'):
            if not isinstance(node, dict) or key not in node:
                return default
            node = node[key]
        return default if node is None else node
