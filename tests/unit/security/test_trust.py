"""Tests for composite trust evaluation."""

import datetime
import ssl

import pytest

from anchor_http.core.exceptions import TrustValidationFailed
from anchor_http.security.certificates import default_trust_anchors
from anchor_http.security.trust import (
    CompositeTrustManager,
    StoreTrustEvaluator,
    TrustEvaluator,
)


class StubEvaluator(TrustEvaluator):
    """Evaluator with a fixed answer that counts how often it was asked."""

    def __init__(self, name, accepts, issuers=()):
        self.name = name
        self.accepts = accepts
        self.issuers = list(issuers)
        self.server_calls = 0
        self.client_calls = 0

    def evaluate_server(self, chain, server_name):
        self.server_calls += 1
        return self.accepts

    def evaluate_client(self, chain):
        self.client_calls += 1
        return self.accepts

    def accepted_issuers(self):
        return list(self.issuers)


class TestCompositeShortCircuit:
    """Оценка останавливается на первом принявшем evaluator."""

    def test_first_accepting_wins(self):
        e1 = StubEvaluator("e1", accepts=False)
        e2 = StubEvaluator("e2", accepts=True)
        e3 = StubEvaluator("e3", accepts=True)
        manager = CompositeTrustManager.from_evaluators([e1, e2, e3])

        assert manager.check_server_trusted([], "api.example.com") is e2
        assert (e1.server_calls, e2.server_calls, e3.server_calls) == (1, 1, 0)

    def test_client_chain(self):
        e1 = StubEvaluator("e1", accepts=True)
        e2 = StubEvaluator("e2", accepts=True)
        manager = CompositeTrustManager.from_evaluators([e1, e2])

        assert manager.check_client_trusted([]) is e1
        assert e2.client_calls == 0

    def test_all_reject(self):
        evaluators = [StubEvaluator(f"e{i}", accepts=False) for i in range(3)]
        manager = CompositeTrustManager.from_evaluators(evaluators)

        with pytest.raises(TrustValidationFailed, match="None of the trust evaluators"):
            manager.check_server_trusted([], "api.example.com")
        with pytest.raises(TrustValidationFailed):
            manager.check_client_trusted([])
        assert all(e.server_calls == 1 and e.client_calls == 1 for e in evaluators)

    def test_no_evaluators_rejects(self):
        manager = CompositeTrustManager.from_evaluators([])

        assert not manager.is_server_trusted([], "x")
        assert not manager.is_client_trusted([])

    def test_bool_helpers(self):
        manager = CompositeTrustManager.from_evaluators([StubEvaluator("e", accepts=True)])

        assert manager.is_server_trusted([], "x")
        assert manager.is_client_trusted([])


class TestAcceptedIssuers:
    def test_concatenated_in_order(self, pki, other_pki):
        manager = CompositeTrustManager.from_evaluators([
            StubEvaluator("a", False, [pki.root]),
            StubEvaluator("b", False, []),
            StubEvaluator("c", False, [other_pki.root, pki.root]),
        ])

        assert manager.accepted_issuers() == [pki.root, other_pki.root, pki.root]

    def test_default_first(self, pki):
        manager = CompositeTrustManager([[pki.root]])
        issuers = manager.accepted_issuers()

        assert issuers[-1] == pki.root
        assert issuers[:-1] == list(default_trust_anchors())


class TestDefaultComposition:
    def test_default_then_extras(self, pki, other_pki):
        manager = CompositeTrustManager([[pki.root], [other_pki.root]])

        assert [e.name for e in manager.evaluators] == ["default", "extra[0]", "extra[1]"]

    def test_only_default(self):
        assert [e.name for e in CompositeTrustManager().evaluators] == ["default"]


class TestStoreTrustEvaluator:
    """Реальная проверка цепочек через cryptography."""

    def test_trusted_chain(self, pki):
        evaluator = StoreTrustEvaluator([pki.root])

        assert evaluator.evaluate_server(pki.chain, "internal.test")
        assert evaluator.evaluate_client(pki.chain)

    def test_ip_address_subject(self, pki):
        assert StoreTrustEvaluator([pki.root]).evaluate_server(pki.chain, "127.0.0.1")

    def test_wrong_host(self, pki):
        assert not StoreTrustEvaluator([pki.root]).evaluate_server(pki.chain, "evil.test")

    def test_unknown_root(self, pki, other_pki):
        assert not StoreTrustEvaluator([other_pki.root]).evaluate_server(pki.chain, "internal.test")

    def test_missing_intermediate(self, pki):
        assert not StoreTrustEvaluator([pki.root]).evaluate_server([pki.leaf], "internal.test")

    def test_empty_chain(self, pki):
        assert not StoreTrustEvaluator([pki.root]).evaluate_server([], "internal.test")

    def test_no_anchors(self, pki):
        evaluator = StoreTrustEvaluator([])

        assert not evaluator.evaluate_server(pki.chain, "internal.test")
        assert evaluator.accepted_issuers() == []

    def test_expired_at_validation_time(self, pki):
        evaluator = StoreTrustEvaluator([pki.root], validation_time=pki.not_after + datetime.timedelta(days=1))
        assert not evaluator.evaluate_server(pki.chain, "internal.test")


class TestCompositeWithRealChains:
    """Дополнительный CA доверяется вместе с системными, а не вместо них."""

    def test_private_ca_trusted_in_addition_to_default(self, pki):
        manager = CompositeTrustManager([[pki.root]])

        accepted = manager.check_server_trusted(pki.chain, "internal.test")

        assert accepted.name == "extra[0]"

    def test_without_extra_ca_rejected(self, pki):
        with pytest.raises(TrustValidationFailed):
            CompositeTrustManager().check_server_trusted(pki.chain, "internal.test")

    def test_second_extra_set(self, pki, other_pki):
        manager = CompositeTrustManager([[pki.root], [other_pki.root]])

        assert manager.check_server_trusted(other_pki.chain, "other.test").name == "extra[1]"


class TestSSLContext:
    def test_context_settings(self, pki):
        context = CompositeTrustManager.from_evaluators([StoreTrustEvaluator([pki.root])]).create_ssl_context()

        assert context.verify_mode == ssl.CERT_REQUIRED
        assert context.check_hostname is True

    def test_context_contains_deduplicated_issuers(self, pki, other_pki):
        manager = CompositeTrustManager.from_evaluators([
            StoreTrustEvaluator([pki.root]),
            StoreTrustEvaluator([pki.root, other_pki.root]),
        ])

        context = manager.create_ssl_context()

        assert context.cert_store_stats()["x509_ca"] == 2

    def test_empty_context(self):
        context = CompositeTrustManager.from_evaluators([]).create_ssl_context()
        assert context.cert_store_stats()["x509_ca"] == 0
