"""
Main proof handler
POST /solve - searches for a proof of a conclusion from premises
"""

import json
import os
import time
from typing import Any, Dict, List
from aws_lambda_powertools import Logger, Tracer, Metrics
from aws_lambda_powertools.metrics import MetricUnit
from aws_lambda_powertools.utilities.typing import LambdaContext

from ..core.certificate import ProofCertificateGenerator
from ..core.checker import StepChecker
from ..core.config import SolverConfig
from ..core.formatter import INVALID_INPUT_MESSAGE
from ..core.parser import split_premises
from ..core.prover import solve
from ..core.search import SearchBudget
from ..utils.response import (
    success_response,
    validation_error_response,
    internal_error_response,
    options_response
)

logger = Logger(service="logic-prover")
tracer = Tracer(service="logic-prover")
metrics = Metrics(namespace="LogicProver", service="logic-prover")

# Environment variables
PROOF_SIGNING_KEY = os.environ.get('PROOF_SIGNING_KEY')
CHECK_TIMEOUT_MS = int(os.environ.get('CHECK_TIMEOUT_MS', '1000'))
DEFAULT_SOLVE_TIMEOUT_MS = int(os.environ.get('DEFAULT_SOLVE_TIMEOUT_MS', '10000'))
SOLVE_TIMEOUT_MARGIN_MS = int(os.environ.get('SOLVE_TIMEOUT_MARGIN_MS', '500'))


@logger.inject_lambda_context(correlation_id_path="headers.\"x-correlation-id\"")
@tracer.capture_lambda_handler
@metrics.log_metrics
def handler(event: Dict[str, Any], context: LambdaContext) -> Dict[str, Any]:
    """
    Proof search handler

    Args:
        event: API Gateway event with premises and conclusion in the body
        context: Lambda context

    Returns:
        API Gateway response with the solve() result
    """
    if event.get('httpMethod') == 'OPTIONS':
        return options_response()

    try:
        try:
            body = json.loads(event.get('body') or '{}')
        except json.JSONDecodeError as e:
            return validation_error_response([f"Request body is not valid JSON: {e.msg}"])

        errors = validate_request(body)
        if errors:
            return validation_error_response(errors)

        premises = body.get('premises', [])
        if isinstance(premises, str):
            premises = split_premises(premises)
        conclusion = body.get('conclusion', '')

        logger.info("Starting proof search", extra={
            "premises_count": len(premises),
            "conclusion": conclusion
        })

        start_time = time.time()
        config = SolverConfig.from_env()
        result = solve(premises, conclusion, config=config, budget=search_budget(config, context))
        execution_time_ms = int((time.time() - start_time) * 1000)

        response_data = dict(result)
        response_data['execution_time_ms'] = execution_time_ms

        if result['success']:
            metrics.add_metric(name="ProofFound", unit=MetricUnit.Count, value=1)
            if body.get('verify'):
                response_data['verification'] = check_steps(result['steps'])
            if body.get('certificate'):
                generator = ProofCertificateGenerator(PROOF_SIGNING_KEY)
                response_data['certificate'] = generator.generate(premises, conclusion, result)
        elif result['message'] == INVALID_INPUT_MESSAGE:
            metrics.add_metric(name="InvalidInput", unit=MetricUnit.Count, value=1)
        else:
            metrics.add_metric(name="ProofNotFound", unit=MetricUnit.Count, value=1)

        metrics.add_metric(name="SolveLatency", unit=MetricUnit.Milliseconds, value=execution_time_ms)

        logger.info("Proof search completed", extra={
            "success": result['success'],
            "steps": len(result.get('steps', [])),
            "execution_time_ms": execution_time_ms
        })

        return success_response(response_data)

    except Exception as e:
        logger.exception(f"Proof search error: {str(e)}")
        return internal_error_response(getattr(context, 'aws_request_id', None))


def validate_request(body: Any) -> List[str]:
    """Type-check the request body, returning a list of problems"""
    if not isinstance(body, dict):
        return ["Request body must be a JSON object"]

    errors = []
    premises = body.get('premises', [])
    if not isinstance(premises, str) and not (
            isinstance(premises, list) and all(isinstance(p, str) for p in premises)):
        errors.append("'premises' must be a string or a list of strings")

    if not isinstance(body.get('conclusion', ''), str):
        errors.append("'conclusion' must be a string")

    for flag in ('verify', 'certificate'):
        if not isinstance(body.get(flag, False), bool):
            errors.append(f"'{flag}' must be a boolean")

    return errors


@tracer.capture_method
def check_steps(steps: List[Dict[str, Any]]) -> Dict[str, Any]:
    """Re-check a found proof with Z3"""
    report = StepChecker(timeout_ms=CHECK_TIMEOUT_MS).check(steps)
    if not report['valid']:
        logger.warning("Proof failed step check", extra={"violations": report['violations']})
    return report


def search_budget(config: SolverConfig, context: LambdaContext) -> SearchBudget:
    """
    Budget that stops the search before the invocation times out

    Uses the configured timeout, or DEFAULT_SOLVE_TIMEOUT_MS when none is
    set, capped by the remaining invocation time less a safety margin.
    """
    limits = [config.timeout_ms if config.timeout_ms is not None else DEFAULT_SOLVE_TIMEOUT_MS]

    get_remaining = getattr(context, 'get_remaining_time_in_millis', None)
    if get_remaining is not None:
        limits.append(max(get_remaining() - SOLVE_TIMEOUT_MARGIN_MS, 0))

    return SearchBudget(max_expansions=config.max_expansions, timeout_ms=min(limits))
