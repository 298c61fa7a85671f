"""TLS trust: certificate loading and composite trust evaluation."""

from .certificates import load_certificate, load_certificates, default_trust_anchors
from .trust import (
    CertificateChain,
    TrustEvaluator,
    StoreTrustEvaluator,
    CompositeTrustManager,
)

__all__ = [
    "load_certificate",
    "load_certificates",
    "default_trust_anchors",
    "CertificateChain",
    "TrustEvaluator",
    "StoreTrustEvaluator",
    "CompositeTrustManager",
]
