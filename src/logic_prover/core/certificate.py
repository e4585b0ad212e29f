"""
Proof certificate generator
Signs found proofs so callers can later show they were not altered
"""

import json
import hashlib
import hmac
from collections import Counter
from typing import Any, Dict, Optional, Sequence
from datetime import datetime, timezone
import base64
import uuid
import logging

logger = logging.getLogger(__name__)

CERTIFICATE_VERSION = "1.0.0"

# Fields excluded from the signed payload
_UNSIGNED_FIELDS = ('signature', 'algorithm', 'hash')


class ProofCertificateGenerator:
    """
    Generates HMAC-signed certificates for successful solve() results
    """

    def __init__(self, signing_key: Optional[str] = None):
        """
        Initialize certificate generator

        Args:
            signing_key: Secret key for signing, random per instance if omitted
        """
        self.signing_key = signing_key or self._generate_key()
        self.algorithm = 'HMAC-SHA256'

    def generate(self,
                 premises: Sequence[str],
                 conclusion: str,
                 result: Dict[str, Any]) -> Dict[str, Any]:
        """
        Generate a certificate for a found proof

        Args:
            premises: Premise strings as submitted
            conclusion: Conclusion string as submitted
            result: Successful result from solve()

        Returns:
            Certificate dictionary
        """
        if not result.get('success'):
            raise ValueError("Certificates can only be generated for successful proofs")

        steps = result['steps']
        certificate_id = str(uuid.uuid4())

        certificate = {
            'id': certificate_id,
            'timestamp': datetime.now(timezone.utc).isoformat(),
            'input_hash': self._hash_data({
                'premises': [p.strip() for p in premises],
                'conclusion': conclusion.strip()
            }),
            'conclusion': steps[-1]['expression'],
            'steps': steps,
            'step_count': len(steps),
            'rules_used': dict(Counter(step['rule'] for step in steps)),
            'version': CERTIFICATE_VERSION
        }

        certificate['signature'] = self._sign(certificate)
        certificate['algorithm'] = self.algorithm
        certificate['hash'] = self._hash_data(certificate)[:16]

        logger.info(f"Generated proof certificate {certificate_id} ({len(steps)} steps)")

        return certificate

    def verify(self, certificate: Dict[str, Any]) -> bool:
        """
        Verify a certificate's signature

        Args:
            certificate: Certificate to verify

        Returns:
            True if signature is valid
        """
        signature = certificate.get('signature')
        if not signature:
            logger.error("Certificate missing signature")
            return False

        payload = {k: v for k, v in certificate.items() if k not in _UNSIGNED_FIELDS}
        expected = self._sign(payload)

        # Constant-time comparison
        return hmac.compare_digest(signature, expected)

    def _hash_data(self, data: Any) -> str:
        """SHA256 hex digest of data, JSON encoded with sorted keys"""
        if not isinstance(data, str):
            data = json.dumps(data, sort_keys=True)
        return hashlib.sha256(data.encode()).hexdigest()

    def _sign(self, payload: Dict[str, Any]) -> str:
        """Base64 HMAC-SHA256 over the deterministic JSON encoding"""
        message = json.dumps(payload, sort_keys=True)
        signature = hmac.new(
            self.signing_key.encode(),
            message.encode(),
            hashlib.sha256
        ).digest()
        return base64.b64encode(signature).decode()

    def _generate_key(self) -> str:
        return base64.b64encode(uuid.uuid4().bytes + uuid.uuid4().bytes).decode()
