"""Fuente unica de catalogos cerrados de la fruteria."""

from __future__ import annotations

MOTIVOS_SALIDA: tuple[str, ...] = (
    "Venta",
    "Merma",
    "Uso Interno",
    "Donación",
)

CATEGORIAS: tuple[str, ...] = (
    "Frutas",
    "Verduras",
)

UNIDADES: tuple[tuple[str, str], ...] = (
    ("kg", "Kilogramos (kg)"),
    ("pieza", "Pieza"),
    ("caja", "Caja"),
)

UNIDADES_VALIDAS: frozenset[str] = frozenset(code for code, _ in UNIDADES)


def normalize_choice(value: str, choices: tuple[str, ...]) -> str | None:
    """Retorna la opcion canonica que coincide sin distinguir mayusculas."""
    target = value.strip().casefold()
    if not target:
        return None

    for choice in choices:
        if choice.casefold() == target:
            return choice
    return None
