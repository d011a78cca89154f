import pandas as pd

from uacascade.client_info import CSV_HEADER


class ExcelReporter:
    """Генератор отчетов в Excel"""

    def __init__(self, output_path):
        self.output_path = output_path

    def generate(self, results):
        """Генерирует Excel отчет: полная таблица и сводки"""
        print(f"\nГенерация отчета: {self.output_path}")

        rows = [info.to_row() + [info.user_agent] for info in results]
        df = pd.DataFrame(rows, columns=list(CSV_HEADER) + ['UserAgent'])

        with pd.ExcelWriter(self.output_path, engine='openpyxl') as writer:
            # Сводка
            summary_data = {
                'Метрика': [
                    'Всего User-Agent',
                    'Пауков',
                    'Ботов',
                    'Мобильных',
                    'Десктопов',
                ],
                'Значение': [
                    len(df),
                    int((df['DeviceType'] == 'Spider').sum()),
                    int((df['DeviceType'] == 'Bot').sum()),
                    int((df['DeviceType'] == 'Mobile').sum()),
                    int((df['DeviceType'] == 'Desktop').sum()),
                ]
            }
            pd.DataFrame(summary_data).to_excel(writer, sheet_name='Сводка', index=False)

            df.to_excel(writer, sheet_name='User-Agent', index=False)

            if not df.empty:
                self._counts(df, ['Browser']).to_excel(writer, sheet_name='Браузеры', index=False)
                self._counts(df, ['OS', 'OSVersion']).to_excel(writer, sheet_name='ОС', index=False)
                self._counts(df, ['DeviceType']).to_excel(writer, sheet_name='Устройства', index=False)

        print(f"Excel отчет сохранен: {self.output_path}")
        return self.output_path

    @staticmethod
    def _counts(df, columns):
        return (
            df.groupby(columns)
            .size()
            .reset_index(name='Количество')
            .sort_values('Количество', ascending=False)
        )
