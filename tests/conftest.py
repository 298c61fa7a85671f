"""
Pytest configuration and fixtures for anchor-http-client tests.
"""

import datetime
import ipaddress
from typing import List, Optional, Tuple

import pytest
import responses as responses_lib
from cryptography import x509
from cryptography.hazmat.primitives import hashes
from cryptography.hazmat.primitives.asymmetric import ec
from cryptography.hazmat.primitives.serialization import Encoding
from cryptography.x509.oid import ExtendedKeyUsageOID, NameOID

from anchor_http.core.config import HTTPClientConfig
from anchor_http.core.exceptions import TransportFault
from anchor_http.core.http_client import HTTPClient
from anchor_http.core.logging.config import LoggingConfig
from anchor_http.core.transport import Connection, Transport
from anchor_http.security.trust import CompositeTrustManager


# ==================== Fake transport ====================

class FakeConnection(Connection):
    """
    Records everything the client does with a connection.

    Args:
        status_code: Status returned by get_status_code()
        body: Returned by read_body()
        error_body: Returned by read_error_body()
        fail_on: Name of the method that raises `error` instead
        error: Exception raised by `fail_on`
    """

    def __init__(self, url, method, timeout, ssl_context, status_code=200, body="",
                 error_body=None, fail_on=None, error=None):
        self.url = url
        self.method = method
        self.timeout = timeout
        self.ssl_context = ssl_context
        self.status_code = status_code
        self.body = body
        self.error_body = error_body
        self.fail_on = fail_on
        self.error = error or TransportFault("connection reset", url=url)

        self.headers: List[Tuple[str, str]] = []
        self.body_writes: List[bytes] = []
        self.calls: List[str] = []
        self.close_count = 0

    def _call(self, name):
        self.calls.append(name)
        if self.fail_on == name:
            raise self.error

    def add_header(self, name, value):
        self._call("add_header")
        self.headers.append((name, value))

    def write_body(self, data):
        self._call("write_body")
        self.body_writes.append(data)

    def get_status_code(self):
        self._call("get_status_code")
        return self.status_code

    def read_body(self):
        self._call("read_body")
        return self.body

    def read_error_body(self):
        self._call("read_error_body")
        return self.error_body

    def close(self):
        self.calls.append("close")
        self.close_count += 1


class FakeTransport(Transport):
    """
    Transport returning FakeConnection objects.

    `respond(...)` sets what the next connections will do; `open_error`
    makes open_connection itself fail.
    """

    def __init__(self):
        self.connections: List[FakeConnection] = []
        self.open_error: Optional[BaseException] = None
        self._response = {}

    def respond(self, **kwargs):
        self._response = kwargs
        return self

    def open_connection(self, url, method, timeout, ssl_context=None):
        if self.open_error is not None:
            raise self.open_error
        connection = FakeConnection(url, method, timeout, ssl_context, **self._response)
        self.connections.append(connection)
        return connection

    @property
    def last(self) -> FakeConnection:
        return self.connections[-1]


@pytest.fixture
def fake_transport():
    """Recording transport; no network."""
    return FakeTransport()


@pytest.fixture(scope="session")
def empty_trust_manager():
    """Trust manager without any evaluators (skips loading the CA bundle)."""
    return CompositeTrustManager.from_evaluators([])


@pytest.fixture
def client(fake_transport, empty_trust_manager):
    """HTTPClient over the fake transport."""
    client = HTTPClient(transport=fake_transport, trust_manager=empty_trust_manager)
    yield client
    client.close()


@pytest.fixture
def base_url():
    """Base URL for testing."""
    return "https://api.example.com"


@pytest.fixture
def mock_responses():
    """Mock HTTP responses using responses library."""
    with responses_lib.RequestsMock() as rsps:
        yield rsps


@pytest.fixture
def logging_config():
    """Standard logging configuration for tests."""
    return LoggingConfig.create(
        level="DEBUG",
        enable_console=True,
        enable_file=False
    )


@pytest.fixture
def logging_config_with_file(tmp_path):
    """
    LoggingConfig with file logging enabled.

    Uses temporary directory for log files to avoid cleanup issues.
    """
    log_file = tmp_path / "test.log"
    return LoggingConfig.create(
        level="DEBUG",
        format="json",
        enable_console=False,
        enable_file=True,
        file_path=str(log_file)
    )


# ==================== Test PKI ====================

class PrivatePKI:
    """Root CA -> intermediate CA -> leaf, all generated in memory."""

    def __init__(self, common_name: str = "Anchor Test Root", leaf_dns: str = "internal.test"):
        now = datetime.datetime.now(datetime.timezone.utc)
        self.not_before = now - datetime.timedelta(days=1)
        self.not_after = now + datetime.timedelta(days=30)

        self.root_key = ec.generate_private_key(ec.SECP256R1())
        self.root = self._ca(common_name, self.root_key, issuer=None, issuer_key=None)

        self.intermediate_key = ec.generate_private_key(ec.SECP256R1())
        self.intermediate = self._ca(
            f"{common_name} Intermediate",
            self.intermediate_key,
            issuer=self.root,
            issuer_key=self.root_key,
        )

        self.leaf_key = ec.generate_private_key(ec.SECP256R1())
        self.leaf = self._leaf(leaf_dns, self.intermediate, self.intermediate_key)

    @property
    def chain(self) -> List[x509.Certificate]:
        """Leaf first, as a server presents it."""
        return [self.leaf, self.intermediate]

    @property
    def root_pem(self) -> bytes:
        return self.root.public_bytes(Encoding.PEM)

    @property
    def root_der(self) -> bytes:
        return self.root.public_bytes(Encoding.DER)

    def _ca(self, common_name, key, issuer, issuer_key):
        subject = x509.Name([x509.NameAttribute(NameOID.COMMON_NAME, common_name)])
        issuer_name = issuer.subject if issuer is not None else subject
        signing_key = issuer_key if issuer_key is not None else key
        authority_key = signing_key.public_key()

        return (
            x509.CertificateBuilder()
            .subject_name(subject)
            .issuer_name(issuer_name)
            .public_key(key.public_key())
            .serial_number(x509.random_serial_number())
            .not_valid_before(self.not_before)
            .not_valid_after(self.not_after)
            .add_extension(x509.BasicConstraints(ca=True, path_length=None), critical=True)
            .add_extension(
                x509.KeyUsage(
                    digital_signature=False, content_commitment=False,
                    key_encipherment=False, data_encipherment=False,
                    key_agreement=False, key_cert_sign=True, crl_sign=True,
                    encipher_only=False, decipher_only=False,
                ),
                critical=True,
            )
            .add_extension(x509.SubjectKeyIdentifier.from_public_key(key.public_key()), critical=False)
            .add_extension(
                x509.AuthorityKeyIdentifier.from_issuer_public_key(authority_key),
                critical=False,
            )
            .sign(signing_key, hashes.SHA256())
        )

    def _leaf(self, dns_name, issuer, issuer_key):
        key = self.leaf_key
        subject = x509.Name([x509.NameAttribute(NameOID.COMMON_NAME, dns_name)])

        return (
            x509.CertificateBuilder()
            .subject_name(subject)
            .issuer_name(issuer.subject)
            .public_key(key.public_key())
            .serial_number(x509.random_serial_number())
            .not_valid_before(self.not_before)
            .not_valid_after(self.not_after)
            .add_extension(
                x509.SubjectAlternativeName([
                    x509.DNSName(dns_name),
                    x509.IPAddress(ipaddress.ip_address("127.0.0.1")),
                ]),
                critical=False,
            )
            .add_extension(x509.BasicConstraints(ca=False, path_length=None), critical=True)
            .add_extension(
                x509.ExtendedKeyUsage([
                    ExtendedKeyUsageOID.SERVER_AUTH,
                    ExtendedKeyUsageOID.CLIENT_AUTH,
                ]),
                critical=False,
            )
            .add_extension(
                x509.AuthorityKeyIdentifier.from_issuer_public_key(issuer_key.public_key()),
                critical=False,
            )
            .sign(issuer_key, hashes.SHA256())
        )


@pytest.fixture(scope="session")
def pki():
    """Private PKI trusted by nobody by default."""
    return PrivatePKI()


@pytest.fixture(scope="session")
def other_pki():
    """Second, unrelated private PKI."""
    return PrivatePKI(common_name="Other Test Root", leaf_dns="other.test")


@pytest.fixture
def config_with_ca(pki):
    """Config that additionally trusts the private root."""
    return HTTPClientConfig.create(certificate=pki.root_pem)
