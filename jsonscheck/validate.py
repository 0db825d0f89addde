"""Validates JSON instance files against a JSON Schema.

This module loads schema and instance documents from disk and reports one
result per instance. An instance file holds a single JSON value or JSON
Lines; a root array is split into separate instances only on request.
"""

import json
import logging
import sys
from typing import Any, List, Tuple

from jsonscheck.validators import SchemaValidator, ValidationError

logger = logging.getLogger(__name__)


class ValidationResult:
    """Result of validating a JSON instance against a schema."""

    def __init__(self, is_valid: bool, errors: List[str] = None, instance_path: str = None,
                 error: ValidationError = None):
        self.is_valid = is_valid
        self.errors = errors or []
        self.instance_path = instance_path
        self.error = error

    def __str__(self) -> str:
        if self.is_valid:
            return "✓ Valid" + (f": {self.instance_path}" if self.instance_path else "")
        else:
            prefix = f"{self.instance_path}: " if self.instance_path else ""
            return f"✗ Invalid: {prefix}" + "; ".join(self.errors)

    def __repr__(self) -> str:
        return f"ValidationResult(is_valid={self.is_valid}, errors={self.errors})"


def validate_instance(instance: Any, schema: Any) -> ValidationResult:
    """Validates a JSON instance against a schema.

    Args:
        instance: The JSON value to validate
        schema: The JSON Schema, a boolean or an object

    Returns:
        ValidationResult with validation status and the first error, if any
    """
    try:
        SchemaValidator(schema).validate(instance)
    except ValidationError as e:
        return ValidationResult(is_valid=False, errors=[str(e)], error=e)
    return ValidationResult(is_valid=True)


def load_instances(instance_file: str, split_arrays: bool = False) -> Tuple[List[Any], List[str], List[Tuple[str, str]]]:
    """Loads the instances held by a file.

    A file that parses as one JSON value is one instance. Otherwise the file
    is read as JSON Lines, one instance per line.

    Args:
        instance_file: Path to JSON file (single value or JSONL)
        split_arrays: Treat a root array as a list of separate instances

    Returns:
        Tuple of (instances, instance_paths, decode_errors) where
        decode_errors holds (path, message) for every undecodable line
    """
    with open(instance_file, 'r', encoding='utf-8') as f:
        content = f.read().strip()

    instances = []
    instance_paths = []
    decode_errors = []

    try:
        data = json.loads(content)
        if split_arrays and isinstance(data, list):
            instances = data
            instance_paths = [f"{instance_file}[{i}]" for i in range(len(data))]
        else:
            instances = [data]
            instance_paths = [instance_file]
    except json.JSONDecodeError:
        for i, line in enumerate(content.split('\n')):
            line = line.strip()
            if not line:
                continue
            path = f"{instance_file}:{i+1}"
            try:
                instances.append(json.loads(line))
                instance_paths.append(path)
            except json.JSONDecodeError as e:
                logger.warning("Undecodable line %s: %s", path, e.msg)
                decode_errors.append((path, f"Invalid JSON: {e.msg}"))

    return instances, instance_paths, decode_errors


def validate_file(instance_file: str, schema_file: str, split_arrays: bool = False) -> List[ValidationResult]:
    """Validates JSON instance file(s) against a schema file.

    Undecodable lines, and a file without any instance, are reported as
    invalid results.

    Args:
        instance_file: Path to JSON file (single value or JSONL)
        schema_file: Path to the JSON Schema file
        split_arrays: Treat a root array as a list of separate instances

    Returns:
        List of ValidationResult for each instance in the file
    """
    with open(schema_file, 'r', encoding='utf-8') as f:
        schema = json.load(f)

    instances, instance_paths, decode_errors = load_instances(instance_file, split_arrays)
    logger.info("Validating %d instance(s) from %s", len(instances), instance_file)

    results = []
    for instance, path in zip(instances, instance_paths):
        result = validate_instance(instance, schema)
        result.instance_path = path
        results.append(result)

    for path, message in decode_errors:
        results.append(ValidationResult(is_valid=False, errors=[message], instance_path=path))

    if not results:
        results.append(ValidationResult(is_valid=False, errors=["No JSON instance found"],
                                        instance_path=instance_file))

    return results


def validate_json_instances(
    input_files: List[str],
    schema_file: str,
    verbose: bool = False,
    split_arrays: bool = False
) -> Tuple[int, int]:
    """Validates multiple JSON instance files against a schema.

    Args:
        input_files: List of JSON file paths to validate
        schema_file: Path to schema file
        verbose: Whether to print validation results
        split_arrays: Treat a root array as a list of separate instances

    Returns:
        Tuple of (valid_count, invalid_count)
    """
    valid_count = 0
    invalid_count = 0

    for input_file in input_files:
        for result in validate_file(input_file, schema_file, split_arrays):
            if result.is_valid:
                valid_count += 1
            else:
                invalid_count += 1
            if verbose:
                print(result)

    return valid_count, invalid_count


# Command entry point for the jsonscheck CLI
def validate(
    input: List[str],
    schema: str,
    quiet: bool = False,
    split_arrays: bool = False
) -> None:
    """Validates JSON instances against a JSON Schema.

    Args:
        input: List of JSON files to validate
        schema: Path to the schema file
        quiet: Suppress output, exit with code 0 if valid, 1 if invalid
        split_arrays: Treat a root array as a list of separate instances
    """
    valid_count, invalid_count = validate_json_instances(
        input_files=input,
        schema_file=schema,
        verbose=not quiet,
        split_arrays=split_arrays
    )

    if not quiet:
        total = valid_count + invalid_count
        print(f"\nValidation summary: {valid_count}/{total} instances valid")

    if invalid_count > 0:
        sys.exit(1)
