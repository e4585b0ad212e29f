"""
Tests for proof certificates
"""

import pytest
from logic_prover import solve
from logic_prover.core.certificate import ProofCertificateGenerator


class TestProofCertificateGenerator:

    def setup_method(self):
        self.generator = ProofCertificateGenerator(signing_key="test-key")
        self.premises = ["P > Q", "P"]
        self.result = solve(self.premises, "Q")

    def test_generate(self):
        certificate = self.generator.generate(self.premises, "Q", self.result)
        assert certificate['conclusion'] == "Q"
        assert certificate['step_count'] == 3
        assert certificate['rules_used'] == {'Premise': 2, 'MP': 1}
        assert certificate['algorithm'] == "HMAC-SHA256"
        assert len(certificate['hash']) == 16

    def test_verify(self):
        certificate = self.generator.generate(self.premises, "Q", self.result)
        assert self.generator.verify(certificate) == True

    def test_tampered_certificate_fails(self):
        certificate = self.generator.generate(self.premises, "Q", self.result)
        certificate['steps'][2]['rule'] = "MT"
        assert self.generator.verify(certificate) == False

    def test_other_key_fails(self):
        certificate = self.generator.generate(self.premises, "Q", self.result)
        assert ProofCertificateGenerator(signing_key="other-key").verify(certificate) == False

    def test_missing_signature(self):
        certificate = self.generator.generate(self.premises, "Q", self.result)
        del certificate['signature']
        assert self.generator.verify(certificate) == False

    def test_input_hash_ignores_surrounding_whitespace(self):
        a = self.generator.generate(["P > Q", "P"], "Q", self.result)
        b = self.generator.generate([" P > Q ", "P "], " Q", self.result)
        assert a['input_hash'] == b['input_hash']

    def test_failed_result_rejected(self):
        with pytest.raises(ValueError):
            self.generator.generate(["P"], "Q", solve(["P"], "Q"))
