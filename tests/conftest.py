"""
Shared fixtures
"""

import os
from dataclasses import dataclass

import pytest

# Powertools settings must exist before the handler module is imported
os.environ.setdefault("POWERTOOLS_TRACE_DISABLED", "true")
os.environ.setdefault("POWERTOOLS_SERVICE_NAME", "logic-prover")
os.environ.setdefault("POWERTOOLS_METRICS_NAMESPACE", "LogicProver")
os.environ.setdefault("AWS_DEFAULT_REGION", "us-east-1")


@pytest.fixture
def lambda_context():
    """Minimal stand-in for the Lambda runtime context"""

    @dataclass
    class LambdaContext:
        function_name: str = "logic-prover-solve"
        memory_limit_in_mb: int = 256
        invoked_function_arn: str = "arn:aws:lambda:us-east-1:123456789012:function:logic-prover-solve"
        aws_request_id: str = "52fdfc07-2182-154f-163f-5f0f9a621d72"
        remaining_time_ms: int = 3000

        def get_remaining_time_in_millis(self) -> int:
            return self.remaining_time_ms

    return LambdaContext()
