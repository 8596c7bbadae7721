# apps/core/errors.py


class TaskTrackError(Exception):
    pass


class PersistenceError(TaskTrackError):
    """Zapis/odczyt w backendzie nie powiódł się (baza niedostępna, błąd SQL)."""


class PolicyDeniedError(PersistenceError):
    """
    Backend odrzucił operację - wiersz nie należy do użytkownika albo już nie istnieje.
    Odpowiednik odmowy przez politykę bezpieczeństwa wierszy ("no rows returned").
    """
