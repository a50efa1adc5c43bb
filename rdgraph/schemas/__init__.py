import json
import os

from jsonschema import Draft7Validator

SCHEMA_DIR = os.path.dirname(__file__)


def load_schema(name):
    with open(os.path.join(SCHEMA_DIR, f'{name}.json'), 'r') as fh:
        return json.load(fh)


def validate(content, name):
    """
    check some loaded JSON content against one of the bundled schemas (config or regions)

    Raises:
        jsonschema.ValidationError: the content does not conform to the schema
    """
    Draft7Validator(load_schema(name)).validate(content)
