"""
Tests for the solve Lambda handler
"""

import json

from logic_prover.core.config import SolverConfig
from logic_prover.handlers import solve as solve_handler
from logic_prover.handlers.solve import handler, search_budget, validate_request


def make_event(body, method='POST'):
    return {
        'httpMethod': method,
        'path': '/solve',
        'headers': {'x-correlation-id': 'test-correlation'},
        'body': body if isinstance(body, str) else json.dumps(body)
    }


class TestSolveHandler:

    def test_options_preflight(self, lambda_context):
        response = handler(make_event('', method='OPTIONS'), lambda_context)
        assert response['statusCode'] == 200
        assert response['body'] == ''
        assert 'POST' in response['headers']['Access-Control-Allow-Methods']

    def test_proof_found(self, lambda_context):
        response = handler(make_event({'premises': "P > Q, P", 'conclusion': "Q"}), lambda_context)
        assert response['statusCode'] == 200
        body = json.loads(response['body'])
        assert body['success'] == True
        assert body['steps'][-1]['rule'] == 'MP'
        assert 'execution_time_ms' in body
        assert 'certificate' not in body

    def test_verify_and_certificate(self, lambda_context):
        response = handler(make_event({
            'premises': ["P > Q", "~Q"],
            'conclusion': "~P",
            'verify': True,
            'certificate': True
        }), lambda_context)
        body = json.loads(response['body'])
        assert body['verification']['valid'] == True
        assert body['certificate']['conclusion'] == "~P"
        assert body['certificate']['signature']

    def test_proof_not_found(self, lambda_context):
        response = handler(make_event({'premises': ["P"], 'conclusion': "Q"}), lambda_context)
        assert response['statusCode'] == 200
        body = json.loads(response['body'])
        assert body['success'] == False
        assert body['message'] == "Proof not found within search limits."

    def test_unprovable_problem_stops_before_invocation_timeout(self, lambda_context):
        response = handler(make_event({'premises': ["P > Q", "R"], 'conclusion': "S"}), lambda_context)
        assert response['statusCode'] == 200
        body = json.loads(response['body'])
        assert body['success'] == False
        assert body['message'] == "Proof not found within search limits."
        assert body['execution_time_ms'] < lambda_context.remaining_time_ms

    def test_invalid_input_is_not_an_http_error(self, lambda_context):
        response = handler(make_event({'premises': [], 'conclusion': "Q"}), lambda_context)
        assert response['statusCode'] == 200
        assert json.loads(response['body'])['message'] == "Error: Invalid Input."

    def test_malformed_json(self, lambda_context):
        response = handler(make_event("{not json"), lambda_context)
        assert response['statusCode'] == 400
        error = json.loads(response['body'])['error']
        assert error['type'] == 'ValidationError'

    def test_wrong_field_types(self, lambda_context):
        response = handler(make_event({'premises': [1, 2], 'conclusion': 3}), lambda_context)
        assert response['statusCode'] == 400
        errors = json.loads(response['body'])['error']['details']['validation_errors']
        assert len(errors) == 2


class TestValidateRequest:

    def test_valid(self):
        assert validate_request({'premises': ["P"], 'conclusion': "P", 'verify': True}) == []

    def test_body_must_be_object(self):
        assert validate_request(["P"]) == ["Request body must be a JSON object"]

    def test_flags_must_be_boolean(self):
        assert validate_request({'certificate': "yes"}) == ["'certificate' must be a boolean"]


class TestSearchBudget:

    def test_capped_by_remaining_time(self, lambda_context):
        lambda_context.remaining_time_ms = 2000
        budget = search_budget(SolverConfig(), lambda_context)
        assert budget.timeout_ms == 2000 - solve_handler.SOLVE_TIMEOUT_MARGIN_MS

    def test_configured_timeout_wins_when_smaller(self, lambda_context):
        budget = search_budget(SolverConfig(timeout_ms=100, max_expansions=50), lambda_context)
        assert budget.timeout_ms == 100
        assert budget.max_expansions == 50

    def test_never_negative(self, lambda_context):
        lambda_context.remaining_time_ms = 10
        assert search_budget(SolverConfig(), lambda_context).timeout_ms == 0

    def test_default_timeout_without_context_clock(self):
        budget = search_budget(SolverConfig(), object())
        assert budget.timeout_ms == solve_handler.DEFAULT_SOLVE_TIMEOUT_MS
