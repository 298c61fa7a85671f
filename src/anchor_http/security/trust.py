"""
Composite trust evaluation.

A chain is trusted when any one of an ordered list of trust evaluators
accepts it. The platform default anchors are always consulted first, extra
anchor sets (e.g. a private CA) follow in the order they were supplied, so a
private CA is trusted in addition to the public bundle, not instead of it.

Example:
    >>> ca = load_certificate(Path("corp-ca.pem").read_bytes())
    >>> manager = CompositeTrustManager([[ca]])
    >>> manager.check_server_trusted([leaf, intermediate], "internal.corp")
    >>> context = manager.create_ssl_context()
"""

import ipaddress
import logging
import ssl
from abc import ABC, abstractmethod
from datetime import datetime
from typing import Callable, Iterable, List, Optional, Sequence, Tuple

from cryptography import x509
from cryptography.x509.verification import PolicyBuilder, Store, VerificationError

from ..core.exceptions import TrustValidationFailed
from .certificates import default_trust_anchors, to_pem

logger = logging.getLogger(__name__)

# Leaf first, then intermediates
CertificateChain = Sequence[x509.Certificate]


class TrustEvaluator(ABC):
    """
    Accepts or rejects a certificate chain against one trust-anchor source.

    Evaluators report the decision as a bool; they never raise for a
    rejected chain.
    """

    name: str = "evaluator"

    @abstractmethod
    def evaluate_server(self, chain: CertificateChain, server_name: str) -> bool:
        """True if `chain` is trusted for a server identified by `server_name`."""

    @abstractmethod
    def evaluate_client(self, chain: CertificateChain) -> bool:
        """True if `chain` is trusted as a client certificate."""

    @abstractmethod
    def accepted_issuers(self) -> List[x509.Certificate]:
        """Trust anchors this evaluator accepts chains for."""


def _subject_for(server_name: str) -> x509.GeneralName:
    try:
        return x509.IPAddress(ipaddress.ip_address(server_name))
    except ValueError:
        return x509.DNSName(server_name)


class StoreTrustEvaluator(TrustEvaluator):
    """
    Evaluator backed by a `cryptography` verification Store.

    Args:
        anchors: Trust anchors (root certificates)
        name: Name used in logs
        validation_time: Fixed verification time (default: now)
    """

    def __init__(
        self,
        anchors: Iterable[x509.Certificate],
        name: str = "custom",
        validation_time: Optional[datetime] = None
    ):
        self._anchors = list(anchors)
        self.name = name
        self._validation_time = validation_time
        # Store() refuses an empty anchor list
        self._store = Store(self._anchors) if self._anchors else None

    @classmethod
    def default(cls, validation_time: Optional[datetime] = None) -> 'StoreTrustEvaluator':
        """Evaluator over the platform default anchors."""
        return cls(default_trust_anchors(), name="default", validation_time=validation_time)

    def _policy(self) -> PolicyBuilder:
        builder = PolicyBuilder().store(self._store)
        if self._validation_time is not None:
            builder = builder.time(self._validation_time)
        return builder

    def _verify(self, chain: CertificateChain, build: Callable[[PolicyBuilder], object]) -> bool:
        if self._store is None or not chain:
            return False

        leaf, intermediates = chain[0], list(chain[1:])
        try:
            build(self._policy()).verify(leaf, intermediates)
        except (VerificationError, ValueError) as e:
            logger.debug("Trust evaluator %s rejected chain: %s", self.name, e)
            return False
        return True

    def evaluate_server(self, chain: CertificateChain, server_name: str) -> bool:
        return self._verify(
            chain,
            lambda policy: policy.build_server_verifier(_subject_for(server_name))
        )

    def evaluate_client(self, chain: CertificateChain) -> bool:
        return self._verify(chain, lambda policy: policy.build_client_verifier())

    def accepted_issuers(self) -> List[x509.Certificate]:
        return list(self._anchors)


class CompositeTrustManager:
    """
    Ordered list of trust evaluators with additive (OR) trust.

    If any one of the evaluators trusts a chain, the chain is trusted.
    Evaluation stops at the first evaluator that accepts.

    Args:
        anchor_sets: Extra anchor sets; one evaluator is created per set and
            placed after the default evaluator
    """

    def __init__(self, anchor_sets: Iterable[Sequence[x509.Certificate]] = ()):
        evaluators: List[TrustEvaluator] = [StoreTrustEvaluator.default()]
        for index, anchors in enumerate(anchor_sets):
            evaluators.append(StoreTrustEvaluator(anchors, name=f"extra[{index}]"))
        self._evaluators: Tuple[TrustEvaluator, ...] = tuple(evaluators)

    @classmethod
    def from_evaluators(cls, evaluators: Iterable[TrustEvaluator]) -> 'CompositeTrustManager':
        """Build a manager over exactly `evaluators`, without the implicit default."""
        manager = cls.__new__(cls)
        manager._evaluators = tuple(evaluators)
        return manager

    @property
    def evaluators(self) -> Tuple[TrustEvaluator, ...]:
        return self._evaluators

    def _first_accepting(
        self,
        accepts: Callable[[TrustEvaluator], bool]
    ) -> Optional[TrustEvaluator]:
        for evaluator in self._evaluators:
            if accepts(evaluator):
                return evaluator
        return None

    def check_server_trusted(self, chain: CertificateChain, server_name: str) -> TrustEvaluator:
        """
        Validate a server chain.

        Returns:
            The evaluator that accepted the chain

        Raises:
            TrustValidationFailed: No evaluator accepted the chain
        """
        evaluator = self._first_accepting(lambda e: e.evaluate_server(chain, server_name))
        if evaluator is None:
            raise TrustValidationFailed()
        logger.debug("Server chain for %s trusted by %s", server_name, evaluator.name)
        return evaluator

    def check_client_trusted(self, chain: CertificateChain) -> TrustEvaluator:
        """
        Validate a client chain.

        Raises:
            TrustValidationFailed: No evaluator accepted the chain
        """
        evaluator = self._first_accepting(lambda e: e.evaluate_client(chain))
        if evaluator is None:
            raise TrustValidationFailed()
        logger.debug("Client chain trusted by %s", evaluator.name)
        return evaluator

    def is_server_trusted(self, chain: CertificateChain, server_name: str) -> bool:
        return self._first_accepting(lambda e: e.evaluate_server(chain, server_name)) is not None

    def is_client_trusted(self, chain: CertificateChain) -> bool:
        return self._first_accepting(lambda e: e.evaluate_client(chain)) is not None

    def accepted_issuers(self) -> List[x509.Certificate]:
        """Concatenation of every evaluator's issuers, in evaluator order."""
        issuers: List[x509.Certificate] = []
        for evaluator in self._evaluators:
            issuers.extend(evaluator.accepted_issuers())
        return issuers

    def create_ssl_context(self) -> ssl.SSLContext:
        """
        Client SSLContext trusting every accepted issuer.

        Hostname checking and CERT_REQUIRED are on. A chain anchored in any
        evaluator's set verifies during the handshake.
        """
        context = ssl.SSLContext(ssl.PROTOCOL_TLS_CLIENT)

        seen = set()
        pem_blocks = []
        for certificate in self.accepted_issuers():
            pem = to_pem(certificate)
            if pem not in seen:
                seen.add(pem)
                pem_blocks.append(pem)

        if pem_blocks:
            context.load_verify_locations(cadata="".join(pem_blocks))
        return context
