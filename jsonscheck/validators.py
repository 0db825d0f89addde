"""Validates JSON instances against JSON Schema documents.

The schema is interpreted keyword by keyword. Each keyword maps to a
validator function in ``KEYWORD_VALIDATORS``; a validator receives the
instance, the keyword's value and the schema object that holds the keyword,
so that keywords such as ``additionalProperties`` can look at their siblings.

Validators ignore instances of a type they do not apply to. Rejecting the
wrong type is the job of the ``type`` keyword alone.

Validation stops at the first failing keyword. The resulting
``ValidationError`` records where it happened: every level of recursion adds
a segment to the instance path and/or the schema path on the way out, so both
paths are stored innermost-first and reversed when rendered.

Known limitations:
- ``$ref`` is not resolved. A schema object containing ``$ref`` accepts
  every instance and its other keywords are not evaluated.
"""

import logging
from fractions import Fraction
from typing import Any, Callable, Dict, Iterable, List, Optional, Union

from jsonpointer import JsonPointer

from jsonscheck.equality import has_unique_elements, is_number, values_equal
from jsonscheck.patterns import PatternError, compile_pattern, matches

logger = logging.getLogger(__name__)

REFERENCE_KEYWORD = '$ref'

# Type alias for a schema: a boolean or a keyword object
Schema = Union[bool, Dict[str, Any]]
Validator = Callable[[Any, Any, Dict[str, Any]], None]

_EMPTY_SCHEMA: Dict[str, Any] = {}
_INVERSE_SCHEMA: Dict[str, Any] = {'not': {}}


class ValidationError(Exception):
    """Exception raised when an instance doesn't match a schema.

    Also raised for problems with the schema itself, such as a false schema,
    a schema that is neither an object nor a boolean, or a malformed pattern.
    """

    def __init__(self, message: str, instance_path: List[str] = None, schema_path: List[str] = None):
        self.message = message
        self.instance_path = list(instance_path or [])
        self.schema_path = list(schema_path or [])
        super().__init__(message)

    @property
    def instance_location(self) -> str:
        """The instance path from the root, segments joined with '/'."""
        return '/'.join(reversed(self.instance_path))

    @property
    def schema_location(self) -> str:
        """The schema path from the root, segments joined with '/'."""
        return '/'.join(reversed(self.schema_path))

    @property
    def instance_pointer(self) -> str:
        """The instance path as a JSON Pointer."""
        return JsonPointer.from_parts(list(reversed(self.instance_path))).path

    @property
    def schema_pointer(self) -> str:
        """The schema path as a JSON Pointer."""
        return JsonPointer.from_parts(list(reversed(self.schema_path))).path

    def __str__(self) -> str:
        return f"At {self.instance_location} in schema {self.schema_location}: {self.message}"

    def __repr__(self) -> str:
        return (f"ValidationError(message={self.message!r}, "
                f"instance_path={self.instance_path!r}, schema_path={self.schema_path!r})")


def _is_array(value: Any) -> bool:
    return isinstance(value, (list, tuple))


def _is_object(value: Any) -> bool:
    return isinstance(value, dict)


def _iter_or_once(value: Any) -> Iterable[Any]:
    if _is_array(value):
        return value
    return (value,)


def bool_to_object_schema(schema: Any) -> Any:
    """Replaces a boolean schema with an equivalent object schema.

    ``true`` becomes ``{}`` and ``false`` becomes ``{"not": {}}``. Any other
    value is returned unchanged.
    """
    if isinstance(schema, bool):
        return _EMPTY_SCHEMA if schema else _INVERSE_SCHEMA
    return schema


def run_validators(instance: Any, schema: Any) -> None:
    """Validates an instance against a schema.

    Args:
        instance: The JSON value to validate
        schema: A boolean or an object schema

    Raises:
        ValidationError: On the first keyword that fails, or if the schema is
            not a boolean or an object
    """
    if isinstance(schema, bool):
        if schema:
            return
        raise ValidationError("False schema always fails")

    if not _is_object(schema):
        raise ValidationError(f"Invalid schema: expected object or boolean, got {type(schema).__name__}")

    if REFERENCE_KEYWORD in schema:
        logger.debug("Not resolving %s %r, accepting instance", REFERENCE_KEYWORD, schema[REFERENCE_KEYWORD])
        return

    for keyword, value in schema.items():
        validator = get_validator(keyword)
        if validator is None:
            logger.debug("Ignoring unknown keyword %r", keyword)
            continue
        try:
            validator(instance, value, schema)
        except ValidationError as e:
            e.schema_path.append(keyword)
            raise


def is_valid(instance: Any, schema: Any) -> bool:
    """Returns True if the instance is valid under the schema."""
    try:
        run_validators(instance, schema)
    except ValidationError:
        return False
    return True


def descend(instance: Any, schema: Any, instance_key: Optional[Any] = None, schema_key: Optional[Any] = None) -> None:
    """Validates a child instance or subschema, extending the error paths.

    Args:
        instance: The child instance
        schema: The subschema
        instance_key: Segment to add to the instance path on failure, if any
        schema_key: Segment to add to the schema path on failure, if any
    """
    try:
        run_validators(instance, schema)
    except ValidationError as e:
        if instance_key is not None:
            e.instance_path.append(str(instance_key))
        if schema_key is not None:
            e.schema_path.append(str(schema_key))
        raise


def _get_regex(pattern: str):
    try:
        return compile_pattern(pattern)
    except PatternError as e:
        raise ValidationError(str(e)) from e


# Object keywords

def validate_properties(instance: Any, schema: Any, parent_schema: Dict[str, Any]) -> None:
    if _is_object(instance) and _is_object(schema):
        for property_name, subschema in schema.items():
            if property_name in instance:
                descend(instance[property_name], subschema, property_name, property_name)


def validate_patternProperties(instance: Any, schema: Any, parent_schema: Dict[str, Any]) -> None:
    if _is_object(instance) and _is_object(schema):
        for pattern, subschema in schema.items():
            regex = _get_regex(pattern)
            for key, value in instance.items():
                if matches(regex, key):
                    descend(value, subschema, key, pattern)


def _find_additional_properties(instance: Dict[str, Any], parent_schema: Dict[str, Any]) -> List[str]:
    """Lists the instance keys covered by neither properties nor patternProperties."""
    properties = parent_schema.get('properties', _EMPTY_SCHEMA)
    pattern_properties = parent_schema.get('patternProperties', _EMPTY_SCHEMA)
    if not (_is_object(properties) and _is_object(pattern_properties)):
        return list(instance)
    regexes = [_get_regex(pattern) for pattern in pattern_properties]
    return [
        key for key in instance
        if key not in properties and not any(matches(regex, key) for regex in regexes)
    ]


def validate_additionalProperties(instance: Any, schema: Any, parent_schema: Dict[str, Any]) -> None:
    if not _is_object(instance):
        return
    extras = _find_additional_properties(instance, parent_schema)
    if _is_object(schema):
        for extra in extras:
            descend(instance[extra], schema, extra, None)
    elif schema is False and extras:
        unexpected = ', '.join(repr(extra) for extra in extras)
        verb = 'was' if len(extras) == 1 else 'were'
        raise ValidationError(f"Additional properties are not allowed ({unexpected} {verb} unexpected)")


def validate_propertyNames(instance: Any, schema: Any, parent_schema: Dict[str, Any]) -> None:
    if _is_object(instance):
        for property_name in instance:
            descend(property_name, schema, property_name, None)


def validate_required(instance: Any, schema: Any, parent_schema: Dict[str, Any]) -> None:
    if _is_object(instance) and _is_array(schema):
        for property_name in schema:
            if isinstance(property_name, str) and property_name not in instance:
                raise ValidationError(f"required property '{property_name}' missing")


def validate_minProperties(instance: Any, schema: Any, parent_schema: Dict[str, Any]) -> None:
    if _is_object(instance) and is_number(schema):
        if len(instance) < schema:
            raise ValidationError(f"Object has {len(instance)} properties, fewer than minProperties {schema}")


def validate_maxProperties(instance: Any, schema: Any, parent_schema: Dict[str, Any]) -> None:
    if _is_object(instance) and is_number(schema):
        if len(instance) > schema:
            raise ValidationError(f"Object has {len(instance)} properties, more than maxProperties {schema}")


def validate_dependencies(instance: Any, schema: Any, parent_schema: Dict[str, Any]) -> None:
    """Applies schema and property dependencies for the properties that are present."""
    if not (_is_object(instance) and _is_object(schema)):
        return
    for property_name, dependency in schema.items():
        if property_name not in instance:
            continue
        dependency = bool_to_object_schema(dependency)
        if _is_object(dependency):
            descend(instance, dependency, None, property_name)
            continue
        for required in _iter_or_once(dependency):
            if isinstance(required, str) and required not in instance:
                raise ValidationError(f"'{required}' is a dependency of '{property_name}'")


# Array keywords

def validate_items(instance: Any, schema: Any, parent_schema: Dict[str, Any]) -> None:
    if not _is_array(instance):
        return
    items = bool_to_object_schema(schema)
    if _is_object(items):
        for index, item in enumerate(instance):
            descend(item, items, index, None)
    elif _is_array(items):
        # trailing elements without a positional schema belong to additionalItems
        for index, (item, subschema) in enumerate(zip(instance, items)):
            descend(item, subschema, index, index)


def validate_additionalItems(instance: Any, schema: Any, parent_schema: Dict[str, Any]) -> None:
    items = parent_schema.get('items')
    if not _is_array(items) or not _is_array(instance):
        return
    if _is_object(schema):
        for index in range(len(items), len(instance)):
            descend(instance[index], schema, index, None)
    elif schema is False and len(instance) > len(items):
        raise ValidationError(
            f"Additional items are not allowed ({len(instance) - len(items)} beyond the {len(items)} "
            f"positional item schemas)")


def validate_contains(instance: Any, schema: Any, parent_schema: Dict[str, Any]) -> None:
    if _is_array(instance):
        if not any(is_valid(element, schema) for element in instance):
            raise ValidationError("None of the array items is valid under the given schema")


def validate_minItems(instance: Any, schema: Any, parent_schema: Dict[str, Any]) -> None:
    if _is_array(instance) and is_number(schema):
        if len(instance) < schema:
            raise ValidationError(f"Array has {len(instance)} items, fewer than minItems {schema}")


def validate_maxItems(instance: Any, schema: Any, parent_schema: Dict[str, Any]) -> None:
    if _is_array(instance) and is_number(schema):
        if len(instance) > schema:
            raise ValidationError(f"Array has {len(instance)} items, more than maxItems {schema}")


def validate_uniqueItems(instance: Any, schema: Any, parent_schema: Dict[str, Any]) -> None:
    if _is_array(instance) and schema is True:
        if not has_unique_elements(instance):
            raise ValidationError("Array items are not unique")


# String keywords

def validate_minLength(instance: Any, schema: Any, parent_schema: Dict[str, Any]) -> None:
    if isinstance(instance, str) and is_number(schema):
        # len() counts code points, not encoded bytes
        if len(instance) < schema:
            raise ValidationError(f"String of length {len(instance)} is shorter than minLength {schema}")


def validate_maxLength(instance: Any, schema: Any, parent_schema: Dict[str, Any]) -> None:
    if isinstance(instance, str) and is_number(schema):
        if len(instance) > schema:
            raise ValidationError(f"String of length {len(instance)} is longer than maxLength {schema}")


def validate_pattern(instance: Any, schema: Any, parent_schema: Dict[str, Any]) -> None:
    if isinstance(instance, str) and isinstance(schema, str):
        if not matches(_get_regex(schema), instance):
            raise ValidationError(f"{instance!r} does not match pattern {schema!r}")


# Numeric keywords
#
# Bounds compare int and float operands exactly, so integers beyond the
# float range never need converting.

def validate_minimum(instance: Any, schema: Any, parent_schema: Dict[str, Any]) -> None:
    if is_number(instance) and is_number(schema):
        if instance < schema:
            raise ValidationError(f"{instance} is less than the minimum of {schema}")


def validate_maximum(instance: Any, schema: Any, parent_schema: Dict[str, Any]) -> None:
    if is_number(instance) and is_number(schema):
        if instance > schema:
            raise ValidationError(f"{instance} is greater than the maximum of {schema}")


def validate_exclusiveMinimum(instance: Any, schema: Any, parent_schema: Dict[str, Any]) -> None:
    if is_number(instance) and is_number(schema):
        if instance <= schema:
            raise ValidationError(f"{instance} is less than or equal to the exclusiveMinimum of {schema}")


def validate_exclusiveMaximum(instance: Any, schema: Any, parent_schema: Dict[str, Any]) -> None:
    if is_number(instance) and is_number(schema):
        if instance >= schema:
            raise ValidationError(f"{instance} is greater than or equal to the exclusiveMaximum of {schema}")


def _is_whole_quotient(instance: Any, divisor: Any) -> bool:
    try:
        quotient = float(instance) / float(divisor)
    except OverflowError:
        # an int too large for a float, divide exactly instead
        return (Fraction(instance) / Fraction(divisor)).denominator == 1
    return quotient.is_integer()


def validate_multipleOf(instance: Any, schema: Any, parent_schema: Dict[str, Any]) -> None:
    if not (is_number(instance) and is_number(schema)):
        return
    if schema == 0:
        raise ValidationError("multipleOf divisor must not be zero")
    if isinstance(schema, float) or isinstance(instance, float):
        failed = not _is_whole_quotient(instance, schema)
    else:
        failed = instance % schema != 0
    if failed:
        raise ValidationError(f"{instance} is not a multiple of {schema}")


# Generic keywords

def _is_integer(instance: Any) -> bool:
    if isinstance(instance, int):
        return True
    return isinstance(instance, float) and instance.is_integer()


TYPE_CHECKERS: Dict[str, Callable[[Any], bool]] = {
    'array': _is_array,
    'object': _is_object,
    'null': lambda instance: instance is None,
    'number': is_number,
    'string': lambda instance: isinstance(instance, str),
    'integer': lambda instance: is_number(instance) and _is_integer(instance),
    'boolean': lambda instance: isinstance(instance, bool),
}


def _matches_type(instance: Any, type_name: Any) -> bool:
    if not isinstance(type_name, str):
        return True
    checker = TYPE_CHECKERS.get(type_name)
    # unknown type names match anything
    return checker is None or checker(instance)


def validate_type(instance: Any, schema: Any, parent_schema: Dict[str, Any]) -> None:
    if not any(_matches_type(instance, type_name) for type_name in _iter_or_once(schema)):
        raise ValidationError(f"{instance!r} is not of type {schema!r}")


def validate_const(instance: Any, schema: Any, parent_schema: Dict[str, Any]) -> None:
    if not values_equal(instance, schema):
        raise ValidationError(f"{instance!r} is not the constant {schema!r}")


def validate_enum(instance: Any, schema: Any, parent_schema: Dict[str, Any]) -> None:
    if _is_array(schema):
        if not any(values_equal(instance, value) for value in schema):
            raise ValidationError(f"{instance!r} is not one of {schema!r}")


# Combinators

def validate_allOf(instance: Any, schema: Any, parent_schema: Dict[str, Any]) -> None:
    if _is_array(schema):
        for index, subschema in enumerate(schema):
            descend(instance, bool_to_object_schema(subschema), None, index)


def validate_anyOf(instance: Any, schema: Any, parent_schema: Dict[str, Any]) -> None:
    if not _is_array(schema) or not schema:
        return
    for subschema in schema:
        if is_valid(instance, bool_to_object_schema(subschema)):
            return
    raise ValidationError(f"{instance!r} is not valid under any of the anyOf schemas")


def validate_oneOf(instance: Any, schema: Any, parent_schema: Dict[str, Any]) -> None:
    if not _is_array(schema):
        return
    matched = sum(1 for subschema in schema if is_valid(instance, bool_to_object_schema(subschema)))
    if matched != 1:
        raise ValidationError(f"{instance!r} is valid under {matched} of the oneOf schemas, expected exactly one")


def validate_not(instance: Any, schema: Any, parent_schema: Dict[str, Any]) -> None:
    if not (isinstance(schema, bool) or _is_object(schema)):
        # a malformed subschema is reported rather than inverted
        run_validators(instance, schema)
    if is_valid(instance, schema):
        raise ValidationError(f"{instance!r} should not be valid under {schema!r}")


KEYWORD_VALIDATORS: Dict[str, Validator] = {
    'patternProperties': validate_patternProperties,
    'propertyNames': validate_propertyNames,
    'additionalProperties': validate_additionalProperties,
    'items': validate_items,
    'additionalItems': validate_additionalItems,
    'const': validate_const,
    'contains': validate_contains,
    'exclusiveMinimum': validate_exclusiveMinimum,
    'exclusiveMaximum': validate_exclusiveMaximum,
    'minimum': validate_minimum,
    'maximum': validate_maximum,
    'multipleOf': validate_multipleOf,
    'minItems': validate_minItems,
    'maxItems': validate_maxItems,
    'uniqueItems': validate_uniqueItems,
    'minLength': validate_minLength,
    'maxLength': validate_maxLength,
    'pattern': validate_pattern,
    'dependencies': validate_dependencies,
    'enum': validate_enum,
    'type': validate_type,
    'properties': validate_properties,
    'required': validate_required,
    'minProperties': validate_minProperties,
    'maxProperties': validate_maxProperties,
    'allOf': validate_allOf,
    'anyOf': validate_anyOf,
    'oneOf': validate_oneOf,
    'not': validate_not,
}


def get_validator(keyword: str) -> Optional[Validator]:
    """Looks up the validator for a schema keyword, None if the keyword is unknown."""
    return KEYWORD_VALIDATORS.get(keyword)


class SchemaValidator:
    """Validates JSON instances against one JSON Schema."""

    def __init__(self, schema: Schema):
        """Initialize the validator with a schema.

        Args:
            schema: The schema to validate against, a boolean or an object
        """
        self.schema = schema

    def validate(self, instance: Any) -> None:
        """Validates a JSON instance against the schema.

        Args:
            instance: The JSON value to validate

        Raises:
            ValidationError: If the instance doesn't match the schema
        """
        run_validators(instance, self.schema)

    def is_valid(self, instance: Any) -> bool:
        return is_valid(instance, self.schema)


def validate_json_against_schema(instance: Any, schema: Schema) -> List[str]:
    """Validates a JSON instance against a JSON Schema.

    Args:
        instance: The JSON value to validate
        schema: The schema

    Returns:
        List of validation error messages (empty if valid)
    """
    validator = SchemaValidator(schema)
    try:
        validator.validate(instance)
        return []
    except ValidationError as e:
        return [str(e)]
