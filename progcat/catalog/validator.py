# -*- coding: utf-8 -*-
"""
Catalog Validator - Structural validation of catalog index documents.

Wraps a JSON schema validator. Only shapes, types and required keys
are checked here; whether referenced files exist is the loader's job.

Dependencies
------------
jsonschema

License
-------
MIT License
Copyright (c) 2026 progcat contributors
See LICENSE file for full text.

Created
-------
2026-10-19

Modified
--------
2026-10-19
"""

# Standard library
import json
from pathlib import Path
from typing import Any, Dict, Optional, Union

# Third-party
from jsonschema import exceptions as jsonschema_exceptions
from jsonschema.validators import validator_for

# progcat internal
from progcat.catalog.errors import SchemaInvalid
from progcat.core.paths import STATIC_DIR


SCHEMA_FILE = STATIC_DIR / "catalog_schema.json"


def load_schema(path: Optional[Path] = None) -> Dict[str, Any]:
    """Load a catalog schema, defaulting to the bundled one.

    Raises
    ------
    OSError
        If the file cannot be read.
    json.JSONDecodeError
        If the file is not JSON.
    """
    path = Path(path) if path is not None else SCHEMA_FILE
    with open(path, 'r', encoding='utf-8') as f:
        return json.load(f)


class SchemaValidator:
    """Validates index documents against a JSON schema.

    The draft is taken from the schema's ``$schema`` keyword
    (Draft 2020-12 if absent).

    Parameters
    ----------
    schema : Dict[str, Any]
        The catalog schema.

    Raises
    ------
    jsonschema.exceptions.SchemaError
        If ``schema`` itself is not a valid schema.
    """

    def __init__(self, schema: Dict[str, Any]) -> None:
        cls = validator_for(schema)
        cls.check_schema(schema)
        self._validator = cls(schema)

    @classmethod
    def from_file(cls, path: Optional[Path] = None) -> 'SchemaValidator':
        return cls(load_schema(path))

    def validate(self, document: Any, path: Union[str, Path] = "<index>") -> None:
        """Raise SchemaInvalid if ``document`` does not conform.

        Parameters
        ----------
        document : Any
            Parsed index document.
        path : Union[str, Path]
            Where the document came from, for the error message.
        """
        error = jsonschema_exceptions.best_match(
            self._validator.iter_errors(document)
        )
        if error is not None:
            raise SchemaInvalid(path, error.message, location=error.json_path)
