"""
Schema declarado de tabelas do irisrap (v1).

Os papéis das colunas são declarados, nunca inferidos a partir dos tipos
dos valores: uma tabela tem exatamente uma coluna de categoria (rótulos
string usados para filtrar e agrupar) e uma lista ordenada de colunas de
medida (float, possivelmente ausentes).

O schema é passado explicitamente para `clean`, `summarize` e `plot`.
`IRIS_SCHEMA` descreve o dataset de referência.

Esta implementação evita dependências externas (ex.: Pydantic), seguindo
o mesmo padrão de validação por `_expect` usado no contrato.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Dict, List, Sequence, Tuple

import pandas as pd

from .errors import PreconditionError, SchemaValidationError, missing_columns, not_a_table


ROLE_CATEGORY = "category"
ROLE_MEASUREMENT = "measurement"

_DTYPE_BY_ROLE = {ROLE_CATEGORY: "string", ROLE_MEASUREMENT: "float"}

# colunas produzidas por `summarize` (n) e `to_long` (measurement, value)
RESERVED_COLUMN_NAMES = ("n", "measurement", "value")
DERIVED_SUFFIXES = ("_mean", "_sd")


def _is_non_empty_str(x: Any) -> bool:
    return isinstance(x, str) and bool(x.strip())


def _expect(cond: bool, msg: str) -> None:
    if not cond:
        raise SchemaValidationError(msg)


def _check_output_names(category: str, measurements: Sequence[str]) -> None:
    declared = [category, *measurements]
    for name in declared:
        _expect(name not in RESERVED_COLUMN_NAMES, f"reserved column name: {name}")
    for name in measurements:
        for suffix in DERIVED_SUFFIXES:
            derived = f"{name}{suffix}"
            _expect(derived not in declared, f"column name {derived} clashes with summary column of {name}")


@dataclass(frozen=True)
class ColumnSpec:
    """Descritor tipado de uma coluna."""

    name: str
    role: str
    dtype: str

    def to_dict(self) -> Dict[str, str]:
        return {"name": self.name, "role": self.role, "dtype": self.dtype}


@dataclass(frozen=True)
class TableSchema:
    """Schema de uma tabela: uma coluna de categoria + medidas ordenadas."""

    category: ColumnSpec
    measurements: Tuple[ColumnSpec, ...]

    @classmethod
    def from_names(cls, category: str, measurements: Sequence[str]) -> "TableSchema":
        return validate_schema({"category": category, "measurements": list(measurements)})

    @property
    def category_name(self) -> str:
        return self.category.name

    @property
    def measurement_names(self) -> List[str]:
        return [m.name for m in self.measurements]

    @property
    def columns(self) -> List[str]:
        return [self.category.name, *self.measurement_names]

    def to_dict(self) -> Dict[str, Any]:
        return {
            "category": self.category.name,
            "measurements": self.measurement_names,
        }

    def check(self, table: Any, *, operation: str) -> pd.DataFrame:
        """Valida pré-condições de uma tabela de entrada.

        - `table` deve ser um `pandas.DataFrame`
        - todas as colunas declaradas devem existir
        - colunas de medida devem ser numéricas (ou inteiramente ausentes)
        - o próprio schema não pode usar nomes reservados (ver `validate_schema`)

        Retorna a própria tabela (sem cópia) para uso encadeado.

        Raises:
            SchemaValidationError: schema construído à mão com nomes reservados.
            PreconditionError
        """
        _check_output_names(self.category_name, self.measurement_names)

        if not isinstance(table, pd.DataFrame):
            raise not_a_table(received=table, operation=operation)

        absent = [c for c in self.columns if c not in table.columns]
        if absent:
            raise missing_columns(columns=absent, operation=operation)

        for name in self.measurement_names:
            col = table[name]
            if pd.api.types.is_bool_dtype(col):
                non_numeric = True
            else:
                non_numeric = not pd.api.types.is_numeric_dtype(col) and not col.isna().all()
            if non_numeric:
                raise PreconditionError(
                    f"measurement column '{name}' is not numeric (dtype: {col.dtype})",
                    details={"column": name, "dtype": str(col.dtype), "operation": operation},
                )

        return table


def validate_schema(data: Any) -> TableSchema:
    """Valida e materializa um `TableSchema` a partir de um mapeamento.

    Formato aceito (ex.: seção `schema:` da config):

        category: species
        measurements: [sepal_length, sepal_width, petal_length, petal_width]

    Nomes reservados: `n`, `measurement` e `value` são colunas produzidas
    por `summarize` e `to_long`, e nenhuma coluna declarada pode coincidir
    com `<medida>_mean` ou `<medida>_sd` de uma medida.
    """
    _expect(isinstance(data, dict), "schema must be a mapping/dict")

    category = data.get("category")
    _expect(_is_non_empty_str(category), "schema.category is required")

    measurements = data.get("measurements")
    _expect(isinstance(measurements, list) and measurements, "schema.measurements must be a non-empty list")

    seen = {category}
    specs: List[ColumnSpec] = []
    for i, name in enumerate(measurements):
        _expect(_is_non_empty_str(name), f"schema.measurements[{i}] must be a non-empty string")
        _expect(name not in seen, f"duplicate column name: {name}")
        seen.add(name)
        specs.append(ColumnSpec(name=name, role=ROLE_MEASUREMENT, dtype=_DTYPE_BY_ROLE[ROLE_MEASUREMENT]))

    _check_output_names(category, measurements)

    return TableSchema(
        category=ColumnSpec(name=category, role=ROLE_CATEGORY, dtype=_DTYPE_BY_ROLE[ROLE_CATEGORY]),
        measurements=tuple(specs),
    )


IRIS_SCHEMA = TableSchema(
    category=ColumnSpec(name="species", role=ROLE_CATEGORY, dtype="string"),
    measurements=(
        ColumnSpec(name="sepal_length", role=ROLE_MEASUREMENT, dtype="float"),
        ColumnSpec(name="sepal_width", role=ROLE_MEASUREMENT, dtype="float"),
        ColumnSpec(name="petal_length", role=ROLE_MEASUREMENT, dtype="float"),
        ColumnSpec(name="petal_width", role=ROLE_MEASUREMENT, dtype="float"),
    ),
)
