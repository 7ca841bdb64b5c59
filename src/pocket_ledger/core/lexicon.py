"""Keyword sets and regex patterns that drive extraction and classification.

The lexicon is built once per process and injected into every extractor and
classifier. Order is significant everywhere: categories, intents and pattern
lists are evaluated first to last and the first hit wins.

Sections can be overridden from a JSON file (``LEXICON_PATH``); keys mirror the
fields of :class:`Lexicon`. ``intents`` is merged per intent so the evaluation
order of the intent groups stays fixed; every other section is replaced whole.
"""

from __future__ import annotations

import json
import re
from collections.abc import Mapping
from dataclasses import dataclass
from functools import lru_cache
from pathlib import Path
from types import MappingProxyType
from typing import Any

from pocket_ledger.core.config import settings

_NUM = r"([0-9.,]*[0-9][0-9.,]*)"

DEFAULT_LEXICON: dict[str, Any] = {
    "categories": {
        "supermercado": [
            "mercado", "super", "carrefour", "día", "coto", "jumbo", "walmart",
            "alimento", "verdulería", "frutería", "compras",
        ],
        "restaurante": [
            "restaurante", "bar", "café", "menu", "comida", "almuerzo", "cena",
            "desayuno", "merienda",
        ],
        "transporte": [
            "uber", "cabify", "taxi", "transporte", "combustible", "gasolina",
            "estacionamiento", "sube", "colectivo", "subte", "tren",
        ],
        "servicios": [
            "electricidad", "agua", "gas", "internet", "teléfono", "celular",
            "factura", "servicio", "wifi", "etb", "wom",
        ],
        "entretenimiento": [
            "cine", "teatro", "concierto", "evento", "streaming", "netflix",
            "spotify", "disney", "hbo", "prime", "claude",
        ],
        "salud": [
            "farmacia", "médico", "hospital", "clínica", "consulta", "remedio",
            "medicina", "bodytech", "gimnasio",
        ],
        "tecnología": [
            "computadora", "pc", "laptop", "celular", "gadget", "auricular",
            "earbuds", "hardware", "software", "app", "aplicación",
        ],
        "snacks": [
            "dulces", "snacks", "golosinas", "chocolate", "galletas", "bebidas",
            "refresco", "café",
        ],
        "educación": ["universidad", "curso", "libro", "semestre", "matrícula", "clases"],
        "otros": [],
    },
    "other_category": "otros",
    "income_category": "ingreso",
    "intents": {
        "expense": [
            "gasté", "pagué", "compré", "abono", "pagado", "costo", "compra", "gasto", "pago",
        ],
        "income": [
            "cobré", "recibí", "ingresé", "ingreso", "depósito", "transferencia", "sueldo",
            "honorarios", "cobro", "freelance",
        ],
        "goal": ["meta", "objetivo", "ahorrar", "ahorro", "reservar", "apartado", "destinar"],
        "report": ["reporte", "informe", "estadísticas", "análisis", "balance", "resumen"],
        "budget": ["presupuesto", "límite", "asignar", "destinar"],
    },
    "amount_patterns": [
        r"\$\s*" + _NUM,
        r"(?i)" + _NUM + r"\s*pesos\b",
        _NUM + r"\s*\$",
        r"(?i)" + _NUM + r"\s*(?:ars|cop|usd)\b",
        r"(?i)(?:pagué|gasté|costó|compré|abono|costo|compra|pago|gasto)\s*(?:de)?\s*\$?\s*"
        + _NUM,
        r"(?i)\$?\s*" + _NUM + r"\s*(?:en|por)\b",
    ],
    "date_patterns": [
        r"(?i)\b(?:el|del|fecha)\s*(\d{1,2})[/\-.](\d{1,2})(?:[/\-.](\d{2,4}))?",
    ],
    "relative_dates": {"anteayer": 2, "ayer": 1, "hoy": 0},
    "receipt_total_patterns": [
        r"(?i)\bTOTAL\s*[$€]?\s*" + _NUM,
        r"(?i)\bIMPORTE\s*[$€]?\s*" + _NUM,
        r"(?i)\bTOTAL\s*:?\s*[$€]?\s*" + _NUM,
        r"[$€]\s*" + _NUM,
    ],
    "receipt_date_patterns": [
        r"(?i)FECHA\s*:?\s*(\d{1,2})[-/.](\d{1,2})[-/.](\d{2,4})",
        r"(?i)FECHA\s*:?\s*(\d{2,4})[-/.](\d{1,2})[-/.](\d{1,2})",
        r"\b(\d{1,2})[-/.](\d{1,2})[-/.](\d{2,4})\b",
        r"\b(\d{2,4})[-/.](\d{1,2})[-/.](\d{1,2})\b",
    ],
    "concept_prepositions": ["en", "de", "para", "por", "a"],
    "concept_articles": ["el", "la", "los", "las"],
    "concept_trailing_words": [
        "hoy", "ayer", "anteayer", "el", "la", "los", "las", "del", "de", "fecha", "pesos",
    ],
    "freelance_markers": ["freelance", "proyecto"],
    "merchant_reject_pattern": r"(?i)factura|ticket|total|importe|fecha|iva|rut|nit",
    "item_exclusions": ["total", "subtotal", "iva"],
    "budget_query_words": ["ver", "estado", "consultar"],
    "unspecified_label": "No especificado",
    "variable_income_label": "Ingreso variable",
    "freelance_label": "Freelance",
    "unidentified_merchant_label": "Comercio no identificado",
}


@dataclass(frozen=True)
class Lexicon:
    categories: Mapping[str, tuple[str, ...]]
    other_category: str
    income_category: str
    intents: Mapping[str, tuple[str, ...]]
    amount_patterns: tuple[re.Pattern[str], ...]
    date_patterns: tuple[re.Pattern[str], ...]
    relative_dates: tuple[tuple[str, int], ...]
    receipt_total_patterns: tuple[re.Pattern[str], ...]
    receipt_date_patterns: tuple[re.Pattern[str], ...]
    concept_prepositions: tuple[str, ...]
    concept_articles: tuple[str, ...]
    concept_trailing_words: frozenset[str]
    freelance_markers: tuple[str, ...]
    merchant_reject_pattern: re.Pattern[str]
    item_exclusions: tuple[str, ...]
    budget_query_words: tuple[str, ...]
    unspecified_label: str
    variable_income_label: str
    freelance_label: str
    unidentified_merchant_label: str

    @property
    def category_keys(self) -> tuple[str, ...]:
        return tuple(self.categories)


def build_lexicon(overrides: Mapping[str, Any] | None = None) -> Lexicon:
    data = dict(DEFAULT_LEXICON)
    for key, value in (overrides or {}).items():
        if key not in data:
            raise ValueError(f"Unknown lexicon section: {key}")
        if key == "intents":
            unknown = set(value) - set(data["intents"])
            if unknown:
                raise ValueError(f"Unknown intents: {sorted(unknown)}")
            data["intents"] = {**data["intents"], **value}
        else:
            data[key] = value

    categories = {
        str(name): tuple(str(kw).lower() for kw in keywords)
        for name, keywords in data["categories"].items()
    }
    if data["other_category"] not in categories:
        categories[data["other_category"]] = ()

    # Longest keyword first so "anteayer" is never read as "ayer".
    relative = sorted(
        ((str(word).lower(), int(days)) for word, days in data["relative_dates"].items()),
        key=lambda pair: len(pair[0]),
        reverse=True,
    )

    return Lexicon(
        categories=MappingProxyType(categories),
        other_category=str(data["other_category"]),
        income_category=str(data["income_category"]),
        intents=MappingProxyType(
            {
                name: tuple(str(kw).lower() for kw in keywords)
                for name, keywords in data["intents"].items()
            }
        ),
        amount_patterns=_compile_all(data["amount_patterns"]),
        date_patterns=_compile_all(data["date_patterns"]),
        relative_dates=tuple(relative),
        receipt_total_patterns=_compile_all(data["receipt_total_patterns"]),
        receipt_date_patterns=_compile_all(data["receipt_date_patterns"]),
        concept_prepositions=_lower_tuple(data["concept_prepositions"]),
        concept_articles=_lower_tuple(data["concept_articles"]),
        concept_trailing_words=frozenset(_lower_tuple(data["concept_trailing_words"])),
        freelance_markers=_lower_tuple(data["freelance_markers"]),
        merchant_reject_pattern=re.compile(data["merchant_reject_pattern"]),
        item_exclusions=_lower_tuple(data["item_exclusions"]),
        budget_query_words=_lower_tuple(data["budget_query_words"]),
        unspecified_label=str(data["unspecified_label"]),
        variable_income_label=str(data["variable_income_label"]),
        freelance_label=str(data["freelance_label"]),
        unidentified_merchant_label=str(data["unidentified_merchant_label"]),
    )


def load_lexicon(path: Path | None = None) -> Lexicon:
    if path is None:
        return build_lexicon()
    raw = json.loads(Path(path).read_text(encoding="utf-8"))
    if not isinstance(raw, dict):
        raise ValueError(f"Lexicon file must contain a JSON object: {path}")
    return build_lexicon(raw)


@lru_cache(maxsize=1)
def get_lexicon() -> Lexicon:
    return load_lexicon(settings.lexicon_path)


def _compile_all(patterns: Any) -> tuple[re.Pattern[str], ...]:
    return tuple(re.compile(p) for p in patterns)


def _lower_tuple(values: Any) -> tuple[str, ...]:
    return tuple(str(v).lower() for v in values)
