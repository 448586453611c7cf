class StoreError(Exception):
    """Любая ошибка доступа к данным: нарушение ограничений, соединение и т.п."""


class RecordNotFoundError(StoreError):
    """Запрос не затронул ни одной строки."""

    def __init__(self, entity: str):
        self.entity = entity
        super().__init__(f"{entity} not found")
