from uacascade.client_info import CSV_HEADER


class CsvReporter:
    """Таблица результатов через запятую.

    Значения пишутся как есть, без кавычек: запятые внутри полей не
    экранируются.
    """

    def __init__(self, output_path):
        self.output_path = output_path

    def generate(self, results):
        print(f"\nГенерация CSV: {self.output_path}")

        lines = [','.join(CSV_HEADER)]
        for info in results:
            lines.append(','.join(info.to_row()))

        with open(self.output_path, 'w', encoding='utf-8', newline='') as f:
            f.write('\n'.join(lines) + '\n')

        print(f"CSV сохранен: {self.output_path} (строк: {len(lines) - 1})")
        return self.output_path
