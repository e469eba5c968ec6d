from __future__ import annotations


def bool_prop(key: str, *, default: bool) -> property:
    def _get(self) -> bool:
        try:
            return bool(self._settings.get(key, default))
        except Exception:
            return bool(default)

    def _set(self, value: bool) -> None:
        self._settings[key] = bool(value)
        self._save()

    return property(_get, _set)


def int_prop(key: str, *, default: int, min_v: int | None = None, max_v: int | None = None) -> property:
    def _clamp(v: int) -> int:
        if min_v is not None:
            v = max(int(min_v), v)
        if max_v is not None:
            v = min(int(max_v), v)
        return v

    def _get(self) -> int:
        try:
            v = int(self._settings.get(key, default))
        except (TypeError, ValueError):
            v = int(default)
        return _clamp(v)

    def _set(self, value: int) -> None:
        try:
            v = int(value)
        except (TypeError, ValueError):
            v = int(default)
        self._settings[key] = _clamp(v)
        self._save()

    return property(_get, _set)


def float_prop(key: str, *, default: float, min_v: float | None = None) -> property:
    def _get(self) -> float:
        try:
            v = float(self._settings.get(key, default))
        except (TypeError, ValueError):
            v = float(default)
        if min_v is not None:
            v = max(float(min_v), v)
        return v

    def _set(self, value: float) -> None:
        try:
            v = float(value)
        except (TypeError, ValueError):
            v = float(default)
        if min_v is not None:
            v = max(float(min_v), v)
        self._settings[key] = v
        self._save()

    return property(_get, _set)


def str_prop(key: str, *, default: str) -> property:
    def _get(self) -> str:
        v = self._settings.get(key, default)
        if v is None:
            return default
        return str(v).strip()

    def _set(self, value: str) -> None:
        self._settings[key] = str(value or "").strip()
        self._save()

    return property(_get, _set)


def argv_prop(key: str, *, default: list[str]) -> property:
    """A command line stored as a JSON list (a plain string is split on spaces)."""

    def _get(self) -> list[str]:
        v = self._settings.get(key, default)
        if isinstance(v, str):
            v = v.split()
        if not isinstance(v, (list, tuple)):
            return list(default)
        out = [str(part) for part in v if str(part)]
        return out or list(default)

    def _set(self, value) -> None:
        if isinstance(value, str):
            value = value.split()
        self._settings[key] = [str(part) for part in (value or [])]
        self._save()

    return property(_get, _set)
