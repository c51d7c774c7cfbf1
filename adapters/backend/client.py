"""
Billing backend REST client

Talks to the billing backend's REST API: saving sales and GST bills,
recording payments against saved sales and reading customer ledgers.

Responses use a JSON envelope, either {"success": true, "data": ...}
or {"status": "success", "data": ...}; the client unwraps `data`.
"""

import logging
from decimal import Decimal
from typing import Any

import httpx

from core.types import BillingType
from core.utils.numeric import to_decimal

logger = logging.getLogger(__name__)


class BillingBackendError(Exception):
    """Billing backend error"""

    def __init__(self, message: str, status_code: int | None = None):
        super().__init__(message)
        self.status_code = status_code


def _number(value: Any) -> float:
    """JSON number from raw input"""
    if isinstance(value, Decimal):
        return float(value)
    return float(to_decimal(value))


class BillingBackendClient:
    """Billing backend REST client

    Args:
        base_url: API root (e.g. http://localhost:5000/api)
        api_token: bearer token, sent when non-empty
        timeout: HTTP timeout (seconds)
        transport: optional httpx transport

    Usage:
    ```python
    client = BillingBackendClient(base_url="http://localhost:5000/api")
    sale = await client.create_sale(BillingType.REGULAR, payload)
    await client.close()
    ```
    """

    SALES_PREFIX = {
        BillingType.WHOLESALE: "/billing",
        BillingType.REGULAR: "/regular-billing",
    }
    GST_PREFIX = "/gst-billing"

    def __init__(
        self,
        base_url: str,
        api_token: str = "",
        timeout: float = 30.0,
        transport: httpx.AsyncBaseTransport | None = None,
    ):
        self.base_url = base_url.rstrip("/")
        self.api_token = api_token
        self.timeout = timeout
        self._transport = transport
        self._client: httpx.AsyncClient | None = None

    async def _ensure_client(self) -> httpx.AsyncClient:
        """HTTP client (lazy init)"""
        if self._client is None:
            headers = {"Accept": "application/json"}
            if self.api_token:
                headers["Authorization"] = f"Bearer {self.api_token}"
            self._client = httpx.AsyncClient(
                timeout=self.timeout,
                headers=headers,
                transport=self._transport,
            )
        return self._client

    async def close(self) -> None:
        """Close the HTTP client"""
        if self._client is not None:
            await self._client.aclose()
            self._client = None

    async def _request(
        self,
        method: str,
        endpoint: str,
        params: dict[str, Any] | None = None,
        body: dict[str, Any] | None = None,
    ) -> Any:
        """Send a request and unwrap the response envelope

        Args:
            method: HTTP method
            endpoint: path under base_url (e.g. /billing/sales)
            params: query parameters
            body: JSON body

        Returns:
            The envelope's `data` member (the whole body when absent)

        Raises:
            BillingBackendError: HTTP >= 400, unsuccessful envelope or transport error
        """
        client = await self._ensure_client()
        url = f"{self.base_url}{endpoint}"

        try:
            if method == "GET":
                response = await client.get(url, params=params)
            elif method == "POST":
                response = await client.post(url, json=body)
            elif method == "PUT":
                response = await client.put(url, json=body)
            else:
                raise ValueError(f"Unsupported HTTP method: {method}")
        except httpx.RequestError as e:
            logger.error(f"Request error: {e}", extra={"endpoint": endpoint})
            raise BillingBackendError(str(e)) from e

        try:
            data = response.json() if response.content else {}
        except ValueError:
            data = {}

        if response.status_code >= 400:
            error_msg = self._error_message(data) or response.text or f"HTTP {response.status_code}"
            logger.error(
                f"Billing backend error: {response.status_code} - {error_msg}",
                extra={"endpoint": endpoint},
            )
            raise BillingBackendError(error_msg, response.status_code)

        if isinstance(data, dict):
            if data.get("success") is False or data.get("status") in ("error", "fail"):
                error_msg = self._error_message(data) or "Request failed"
                logger.error(
                    f"Billing backend rejected request: {error_msg}",
                    extra={"endpoint": endpoint},
                )
                raise BillingBackendError(error_msg, response.status_code)
            if "data" in data:
                return data["data"]

        return data

    @staticmethod
    def _error_message(data: Any) -> str:
        if not isinstance(data, dict):
            return ""
        for key in ("message", "error"):
            value = data.get(key)
            if isinstance(value, dict):
                value = value.get("message")
            if value:
                return str(value)
        return ""

    def _sales_prefix(self, billing_type: BillingType | str) -> str:
        return self.SALES_PREFIX[BillingType.parse(billing_type)]

    # =========================================================================
    # Sales
    # =========================================================================

    async def create_sale(self, billing_type: BillingType, payload: dict[str, Any]) -> dict[str, Any]:
        """Save a sale

        Args:
            billing_type: wholesale or regular
            payload: sale request body

        Returns:
            Saved sale record
        """
        prefix = self._sales_prefix(billing_type)
        sale = await self._request("POST", f"{prefix}/sales", body=payload)
        logger.info(
            f"Sale created: {BillingType.parse(billing_type).value}",
            extra={"sale_id": sale.get("id") if isinstance(sale, dict) else None},
        )
        return sale

    async def update_sale(
        self,
        billing_type: BillingType,
        sale_id: str,
        payload: dict[str, Any],
    ) -> dict[str, Any]:
        """Replace a saved sale"""
        prefix = self._sales_prefix(billing_type)
        return await self._request("PUT", f"{prefix}/sales/{sale_id}", body=payload)

    # =========================================================================
    # Payments against a saved sale
    # =========================================================================

    async def record_silver_payment(
        self,
        billing_type: BillingType,
        sale_id: str,
        fine_weight: Any,
        notes: str = "",
        details: dict[str, Any] | None = None,
    ) -> dict[str, Any]:
        """Record silver received

        Wholesale calls this a silver return; regular sales also carry
        the source details (name, fromNo, weight, touch).
        """
        flow = BillingType.parse(billing_type)
        prefix = self._sales_prefix(flow)
        body: dict[str, Any] = {"silverWeight": _number(fine_weight), "notes": notes}

        if flow == BillingType.REGULAR:
            body.update(details or {})
            return await self._request("POST", f"{prefix}/sales/{sale_id}/silver-payment", body=body)
        return await self._request("POST", f"{prefix}/sales/{sale_id}/silver-return", body=body)

    async def record_cash_for_silver(
        self,
        billing_type: BillingType,
        sale_id: str,
        silver_weight: Any,
        silver_rate: Any,
        notes: str = "",
    ) -> dict[str, Any]:
        """Record owed silver settled in cash"""
        prefix = self._sales_prefix(billing_type)
        body = {
            "silverWeight": _number(silver_weight),
            "silverRate": _number(silver_rate),
            "notes": notes,
        }
        return await self._request("POST", f"{prefix}/sales/{sale_id}/cash-for-silver", body=body)

    async def record_cash_payment(
        self,
        billing_type: BillingType,
        sale_id: str,
        amount: Any,
        notes: str = "",
        method: str = "cash",
        reference_no: str = "",
    ) -> dict[str, Any]:
        """Record a cash payment (wholesale) or labor payment (regular)"""
        flow = BillingType.parse(billing_type)
        prefix = self._sales_prefix(flow)

        if flow == BillingType.REGULAR:
            body = {"laborAmount": _number(amount), "notes": notes}
            return await self._request("POST", f"{prefix}/sales/{sale_id}/labor-payment", body=body)

        body = {
            "amount": _number(amount),
            "paymentMode": method,
            "referenceNumber": reference_no,
            "notes": notes,
        }
        return await self._request("POST", f"{prefix}/sales/{sale_id}/payment", body=body)

    # =========================================================================
    # Ledgers
    # =========================================================================

    async def get_customer_ledger(self, billing_type: BillingType, customer_id: str) -> dict[str, Any]:
        """Customer record and ledger transactions (oldest first)"""
        prefix = self._sales_prefix(billing_type)
        data = await self._request("GET", f"{prefix}/customers/{customer_id}/ledger")
        if not isinstance(data, dict):
            return {"customer": {}, "transactions": []}
        return {
            "customer": data.get("customer") or {},
            "transactions": data.get("transactions") or [],
        }

    # =========================================================================
    # GST
    # =========================================================================

    async def create_gst_bill(self, payload: dict[str, Any]) -> dict[str, Any]:
        """Save a GST tax invoice"""
        bill = await self._request("POST", f"{self.GST_PREFIX}/bills", body=payload)
        logger.info("GST bill created")
        return bill
