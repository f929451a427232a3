import logging

import pytest

from normalize1nf.document import build_module_configuration
from normalize1nf.structure import (
    ColumnStructure,
    DatabaseStructure,
    PrimaryKey,
    SchemaStructure,
    TableStructure,
)


@pytest.fixture(autouse=True)
def enable_normalize1nf_logger_propagation():
    """
    Enable log propagation for the normalize1nf logger during tests.

    The normalize1nf logger has propagate=False (set in context.py), which
    prevents pytest's caplog fixture from capturing log messages.
    """
    normalize1nf_logger = logging.getLogger("normalize1nf")
    original_propagate = normalize1nf_logger.propagate
    normalize1nf_logger.propagate = True
    yield
    normalize1nf_logger.propagate = original_propagate


def make_table(name, columns, primary_key=("id",), schema="s"):
    """Build a TableStructure from (name, type, original type) triples."""
    return TableStructure(
        name=name,
        schema=schema,
        columns=tuple(ColumnStructure(*column) for column in columns),
        primary_key=PrimaryKey(tuple(primary_key)) if primary_key else None,
    )


@pytest.fixture
def orders_table():
    return make_table(
        "t",
        [
            ("id", "INTEGER", "int4"),
            ("tags", "CHARACTER VARYING ARRAY", "_varchar"),
            ("meta", "CHARACTER LARGE OBJECT", "json"),
            ("name", "CHARACTER VARYING(50)", "varchar"),
        ],
    )


@pytest.fixture
def structure(orders_table):
    keyless = make_table(
        "log",
        [
            ("line", "INTEGER", "int4"),
            ("labels", "INTEGER ARRAY", "_int4"),
        ],
        primary_key=None,
    )
    customers = make_table(
        "customers",
        [
            ("tenant", "INTEGER", "int4"),
            ("code", "CHARACTER VARYING(10)", "varchar"),
            ("phones", "CHARACTER VARYING ARRAY", "_varchar"),
        ],
        primary_key=("tenant", "code"),
    )
    return DatabaseStructure(
        schemas=[SchemaStructure(name="s", tables=(orders_table, keyless, customers))]
    )


@pytest.fixture
def module_configuration(structure):
    return build_module_configuration(structure)


STRUCTURE_YAML = """
schemas:
  - name: s
    tables:
      - name: t
        columns:
          - name: id
            type: INTEGER
            originalType: int4
          - name: tags
            type: CHARACTER VARYING ARRAY
            originalType: _varchar
          - name: meta
            type: CHARACTER LARGE OBJECT
            originalType: jsonb
        primaryKey:
          name: t_pkey
          columns: [id]
      - name: log
        columns:
          - name: line
            type: INTEGER
          - name: labels
            type: INTEGER ARRAY
            originalType: _int4
"""


@pytest.fixture
def structure_file(tmp_path):
    path = tmp_path / "structure.yml"
    path.write_text(STRUCTURE_YAML)
    return path
