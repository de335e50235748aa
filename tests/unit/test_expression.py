"""
Tests for ExpressionBuilder and Expression (expression.py).
"""

import pytest
from boto3.dynamodb.conditions import Attr, Key

from dynamodb_document_client.exceptions import EncodeError, InvalidArgumentError
from dynamodb_document_client.expression import (
    Expression,
    ExpressionBuilder,
    build_projection_expression,
)


class TestExpressionBuilder:
    """Test compiling conditions into expressions."""

    def test_key_condition(self):
        expr = ExpressionBuilder().with_key_condition(Key('id').eq('w1')).build()

        assert expr.key_condition == '#n0 = :v0'
        assert expr.names == {'#n0': 'id'}
        assert expr.values == {':v0': {'S': 'w1'}}
        assert expr.filter is None
        assert expr.projection is None

    def test_key_and_filter_placeholders_do_not_collide(self):
        expr = (
            ExpressionBuilder()
            .with_key_condition(Key('customer_id').eq('c1'))
            .with_filter(Attr('qty').gt(3))
            .build()
        )

        assert expr.key_condition == '#n0 = :v0'
        assert expr.filter == '#n1 > :v1'
        assert expr.names == {'#n0': 'customer_id', '#n1': 'qty'}
        assert expr.values == {':v0': {'S': 'c1'}, ':v1': {'N': '3'}}

    def test_composite_key_condition(self):
        expr = (
            ExpressionBuilder()
            .with_key_condition(Key('customer_id').eq('c1') & Key('order_id').begins_with('2024'))
            .build()
        )

        assert expr.key_condition == '(#n0 = :v0 AND begins_with(#n1, :v1))'
        assert expr.values[':v1'] == {'S': '2024'}

    def test_float_values_are_marshalled(self):
        expr = ExpressionBuilder().with_filter(Attr('price').lt(9.99)).build()

        assert expr.values == {':v0': {'N': '9.99'}}

    def test_projection(self):
        expr = ExpressionBuilder().with_projection(['id', 'status']).build()

        assert expr.projection == '#p0, #p1'
        assert expr.names == {'#p0': 'id', '#p1': 'status'}

    def test_attr_as_key_condition_rejected(self):
        builder = ExpressionBuilder().with_key_condition(Attr('id').eq('w1'))

        with pytest.raises(InvalidArgumentError, match="Invalid condition"):
            builder.build()

    def test_non_condition_rejected(self):
        builder = ExpressionBuilder().with_filter("qty > 3")

        with pytest.raises(InvalidArgumentError):
            builder.build()

    def test_unencodable_value(self):
        builder = ExpressionBuilder().with_filter(Attr('qty').eq(float('nan')))

        with pytest.raises(EncodeError):
            builder.build()

    def test_empty_builder(self):
        expr = ExpressionBuilder().build()

        assert expr == Expression()
        assert expr.request_params() == {}


class TestExpressionRequestParams:
    """Test rendering expressions as boto3 parameters."""

    def test_query_params(self):
        expr = (
            ExpressionBuilder()
            .with_key_condition(Key('id').eq('w1'))
            .with_filter(Attr('qty').gte(1))
            .with_projection(['id'])
            .build()
        )

        assert expr.request_params() == {
            'ExpressionAttributeNames': {'#n0': 'id', '#n1': 'qty', '#p0': 'id'},
            'ExpressionAttributeValues': {':v0': {'S': 'w1'}, ':v1': {'N': '1'}},
            'KeyConditionExpression': '#n0 = :v0',
            'FilterExpression': '#n1 >= :v1',
            'ProjectionExpression': '#p0',
        }

    def test_filter_only_params(self):
        expr = Expression(filter='#n0 <> :v0', names={'#n0': 'id'}, values={':v0': {'S': 'w1'}})

        params = expr.request_params()

        assert 'KeyConditionExpression' not in params
        assert params['FilterExpression'] == '#n0 <> :v0'

    def test_expression_is_frozen(self):
        expr = Expression()

        with pytest.raises(Exception):
            expr.filter = '#n0 > :v0'


class TestBuildProjectionExpression:

    def test_no_fields(self):
        assert build_projection_expression(None) == (None, None)
        assert build_projection_expression([]) == (None, None)

    def test_reserved_words_are_placeholders(self):
        projection, names = build_projection_expression(['name', 'status', 'data'])

        assert projection == '#p0, #p1, #p2'
        assert names == {'#p0': 'name', '#p1': 'status', '#p2': 'data'}
