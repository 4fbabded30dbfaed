"""Parametros globales del proyecto."""

from __future__ import annotations

import logging
import os
from pathlib import Path

BASE_DIR = Path(__file__).resolve().parent
DATA_DIR = BASE_DIR / "data"
OUTPUT_DIR = DATA_DIR / "output"
DEFAULT_REPORT_FILENAME = "reporte_caducidad.csv"

API_URL = os.environ.get("FRUTERIA_API_URL", "http://localhost:3001").rstrip("/")
REQUEST_TIMEOUT_SECONDS = 10.0

DIAS_POR_CADUCAR = 7
DIAS_BARRA_CADUCIDAD = 30
MOVIMIENTOS_RECIENTES = 5
MIN_LONGITUD_TEXTO = 3
DECIMALES_CANTIDAD = 2

logging.basicConfig(
    level=logging.INFO,
    format="%(asctime)s | %(levelname)s | %(name)s | %(message)s",
)
