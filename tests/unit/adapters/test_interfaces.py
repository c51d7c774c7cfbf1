"""
Protocol interface tests

Implementations satisfy ISalesBackend.
"""

from adapters.backend.client import BillingBackendClient
from adapters.interfaces import ISalesBackend
from adapters.mock.backend import MockBillingBackend


class TestISalesBackend:
    """ISalesBackend Protocol tests"""

    def test_mock_implements_protocol(self) -> None:
        assert isinstance(MockBillingBackend(), ISalesBackend)

    def test_client_implements_protocol(self) -> None:
        client = BillingBackendClient(base_url="http://backend.test/api")
        assert isinstance(client, ISalesBackend)

    def test_protocol_has_required_methods(self) -> None:
        required_methods = [
            "create_sale",
            "update_sale",
            "record_silver_payment",
            "record_cash_for_silver",
            "record_cash_payment",
            "get_customer_ledger",
            "create_gst_bill",
            "close",
        ]

        backend = MockBillingBackend()

        for method_name in required_methods:
            assert hasattr(backend, method_name), f"Missing method: {method_name}"
            assert callable(getattr(backend, method_name))

    def test_unrelated_object_does_not_match(self) -> None:
        assert not isinstance(object(), ISalesBackend)
