"""Carregamento da tabela de entrada.

Responsabilidades:
- fornecer o dataset de referência (iris) com as colunas de `IRIS_SCHEMA`
- ler uma tabela de arquivo (CSV / Parquet) de forma determinística
- calcular o fingerprint (sha256 + bytes) do arquivo lido, para o manifest

Limites explícitos (v1):
- NÃO filtra nem imputa (isso é `clean`)
- NÃO infere papéis de coluna (isso é o schema declarado)
"""

from __future__ import annotations

import hashlib
from pathlib import Path
from typing import Tuple, Union

import pandas as pd
from sklearn.datasets import load_iris as _sklearn_load_iris

from irisrap.core.schema import IRIS_SCHEMA


_SKLEARN_COLUMNS = {
    "sepal length (cm)": "sepal_length",
    "sepal width (cm)": "sepal_width",
    "petal length (cm)": "petal_length",
    "petal width (cm)": "petal_width",
}


def _resolve_path(path_value: Union[str, Path]) -> Path:
    if not isinstance(path_value, (str, Path)) or not str(path_value).strip():
        raise ValueError("Missing required config: dataset.path")

    p = Path(path_value).expanduser()
    if not p.exists():
        raise FileNotFoundError(f"File not found: {p}")
    if not p.is_file():
        raise ValueError(f"Path is not a file: {p}")
    return p


def fingerprint(path: Union[str, Path]) -> Tuple[str, int]:
    """Retorna (sha256 hexadecimal, tamanho em bytes) do arquivo."""
    h = hashlib.sha256()
    size = 0
    with _resolve_path(path).open("rb") as f:
        for chunk in iter(lambda: f.read(8192), b""):
            h.update(chunk)
            size += len(chunk)
    return h.hexdigest(), size


def load_iris() -> pd.DataFrame:
    """Dataset iris (150 linhas) com as colunas de `IRIS_SCHEMA`.

    A espécie é um rótulo string (`setosa`, `versicolor`, `virginica`).
    """
    bunch = _sklearn_load_iris(as_frame=True)
    frame = bunch.frame.rename(columns=_SKLEARN_COLUMNS)

    names = list(bunch.target_names)
    species = frame["target"].map(lambda code: str(names[int(code)]))

    out = frame[IRIS_SCHEMA.measurement_names].astype(float)
    out.insert(0, IRIS_SCHEMA.category_name, species)
    return out


def load_table(path: Union[str, Path]) -> pd.DataFrame:
    """Lê uma tabela de arquivo CSV ou Parquet (pela extensão).

    Células vazias do CSV (ou `NA`) chegam como valores ausentes.

    Raises:
        FileNotFoundError: arquivo inexistente.
        ValueError: extensão não suportada.
    """
    p = _resolve_path(path)
    suffix = p.suffix.lower()

    if suffix == ".csv":
        return pd.read_csv(p)
    if suffix in {".parquet", ".pq"}:
        return pd.read_parquet(p)

    raise ValueError(f"Unsupported dataset format: {suffix} (expected .csv or .parquet)")
