"""
Expression building for query and scan.

Conditions are written with boto3's ``Key`` / ``Attr`` helpers and compiled by
boto3's ConditionExpressionBuilder into expression strings plus name/value
placeholders. Placeholder values are marshalled here, because the low-level
client expects attribute-value form.

Example:
    expr = (
        ExpressionBuilder()
        .with_key_condition(Key('pk').eq('widget') & Key('sk').begins_with('w'))
        .with_filter(Attr('qty').gt(3))
        .with_projection(['pk', 'sk', 'qty'])
        .build()
    )
"""

from typing import Any, Dict, List, Optional, Tuple

from boto3.dynamodb.conditions import ConditionBase, ConditionExpressionBuilder
from boto3.exceptions import Boto3Error
from pydantic import BaseModel, ConfigDict, Field

from .exceptions import InvalidArgumentError
from .utils import marshal_value


class Expression(BaseModel):
    """Compiled expression bundle passed to query and scan.

    Attributes:
        names: ExpressionAttributeNames placeholders
        values: ExpressionAttributeValues placeholders, in attribute-value form
        key_condition: KeyConditionExpression (query only)
        filter: FilterExpression, applied server side
        projection: ProjectionExpression
    """

    names: Dict[str, str] = Field(default_factory=dict)
    values: Dict[str, Dict[str, Any]] = Field(default_factory=dict)
    key_condition: Optional[str] = None
    filter: Optional[str] = None
    projection: Optional[str] = None

    model_config = ConfigDict(frozen=True)

    def request_params(self) -> Dict[str, Any]:
        """Render the expression as boto3 request parameters.

        Empty parts are left out; botocore rejects empty placeholder maps.
        """
        params: Dict[str, Any] = {}
        if self.names:
            params['ExpressionAttributeNames'] = dict(self.names)
        if self.values:
            params['ExpressionAttributeValues'] = dict(self.values)
        if self.key_condition:
            params['KeyConditionExpression'] = self.key_condition
        if self.filter:
            params['FilterExpression'] = self.filter
        if self.projection:
            params['ProjectionExpression'] = self.projection
        return params


def build_projection_expression(fields: Optional[List[str]]) -> Tuple[Optional[str], Optional[Dict[str, str]]]:
    """Build ProjectionExpression with ExpressionAttributeNames.

    Every field goes through a name placeholder so reserved words are safe.

    Example:
        >>> build_projection_expression(['id', 'status'])
        ('#p0, #p1', {'#p0': 'id', '#p1': 'status'})
    """
    if not fields:
        return None, None

    expression_names = {}
    projection_parts = []

    for i, field in enumerate(fields):
        attr_name = f"#p{i}"
        expression_names[attr_name] = field
        projection_parts.append(attr_name)

    return ', '.join(projection_parts), expression_names


class ExpressionBuilder:
    """Fluent builder producing an Expression."""

    def __init__(self):
        self._key_condition: Optional[ConditionBase] = None
        self._filter: Optional[ConditionBase] = None
        self._projection: Optional[List[str]] = None

    def with_key_condition(self, condition: ConditionBase) -> 'ExpressionBuilder':
        self._key_condition = condition
        return self

    def with_filter(self, condition: ConditionBase) -> 'ExpressionBuilder':
        self._filter = condition
        return self

    def with_projection(self, fields: List[str]) -> 'ExpressionBuilder':
        self._projection = list(fields)
        return self

    def build(self) -> Expression:
        """Compile the configured parts into an Expression.

        One ConditionExpressionBuilder compiles both conditions so their
        placeholders never collide.

        Raises:
            InvalidArgumentError: If a condition is not a boto3 condition, or an
                ``Attr`` condition is used as the key condition
            EncodeError: If a placeholder value cannot be marshalled
        """
        builder = ConditionExpressionBuilder()
        names: Dict[str, str] = {}
        raw_values: Dict[str, Any] = {}
        key_condition = None
        filter_expression = None

        try:
            if self._key_condition is not None:
                built = builder.build_expression(self._key_condition, is_key_condition=True)
                key_condition = built.condition_expression
                names.update(built.attribute_name_placeholders)
                raw_values.update(built.attribute_value_placeholders)

            if self._filter is not None:
                built = builder.build_expression(self._filter)
                filter_expression = built.condition_expression
                names.update(built.attribute_name_placeholders)
                raw_values.update(built.attribute_value_placeholders)
        except Boto3Error as e:
            raise InvalidArgumentError(f"Invalid condition: {e}", argument='condition', original_error=e) from e

        projection, projection_names = build_projection_expression(self._projection)
        if projection_names:
            names.update(projection_names)

        return Expression(
            names=names,
            values={placeholder: marshal_value(value) for placeholder, value in raw_values.items()},
            key_condition=key_condition,
            filter=filter_expression,
            projection=projection
        )
