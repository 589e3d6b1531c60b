"""Validation and result shaping shared by the "get filtered" usecases."""

from usecases.errors import ValidationError

SCALAR_TYPES = (str, int, float, bool)


def validate_filters(filters, allowed_columns, validate_value=None):
    """Reject unknown columns and values the column could never hold.

    ``validate_value(column, value)`` applies the model's own field rules and
    raises ValidationError.
    """
    if not isinstance(filters, dict):
        raise ValidationError('filter must be an object of column/value pairs')
    for column, value in filters.items():
        if column not in allowed_columns:
            raise ValidationError(f"unknown filter column: {column}",
                                  details={'allowed': list(allowed_columns)})
        if not isinstance(value, SCALAR_TYPES):
            raise ValidationError(f"filter value for {column} must be a scalar")
        if validate_value is not None:
            validate_value(column, value)


def stringify_filter_value(value):
    # JSON spelling for booleans, so {"is_occupied": true} is keyed "true"
    if isinstance(value, bool):
        return 'true' if value else 'false'
    return str(value)


def shape_filter_result(filters, ids_by_column, key_mode='value'):
    """
    Reshape ``{column: [ids]}`` into the response mapping.

    ``value`` mode keys every list by the stringified filter value and
    concatenates lists whose values stringify identically; columns without a
    match are left out. ``column`` mode keeps one entry per requested column.
    Either way each column is evaluated on its own, never intersected.
    """
    if key_mode == 'column':
        return {column: list(ids_by_column.get(column, [])) for column in filters}

    shaped = {}
    for column, value in filters.items():
        ids = ids_by_column.get(column) or []
        if not ids:
            continue
        shaped.setdefault(stringify_filter_value(value), []).extend(ids)
    return shaped
