class RepositoryError(Exception):
    """Любая ошибка хранилища."""


class RecordNotFound(RepositoryError):
    """Запись с указанным идентификатором или логином отсутствует."""

    def __init__(self, entity: str, key: object) -> None:
        self.entity = entity
        self.key = key
        super().__init__(f"{entity} {key!r} not found")
