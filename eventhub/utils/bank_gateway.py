import os
import logging
from dataclasses import dataclass
import requests
from dotenv import load_dotenv
from .constants import AppConstants

load_dotenv()

logger = logging.getLogger(__name__)

BANK_API_URL = os.getenv("BANK_API_URL", "http://localhost:8081")
BANK_ACCOUNT_NUMBER = int(os.getenv("BANK_ACCOUNT_NUMBER", "341234"))
BANK_API_TIMEOUT = float(os.getenv("BANK_API_TIMEOUT", "10"))


@dataclass
class BankTransferResult:
    success: bool
    message: str


class BankGatewayClient:
    """Client for the external bank's account-to-account transfer API"""

    def __init__(
        self,
        base_url: str = BANK_API_URL,
        merchant_account: int = BANK_ACCOUNT_NUMBER,
        timeout: float = BANK_API_TIMEOUT,
    ):
        self.base_url = base_url.rstrip("/")
        self.merchant_account = merchant_account
        self.timeout = timeout

    def transfer(
        self,
        from_account: str,
        amount: float,
        remarks: str = AppConstants.BANK_PAYMENT_REMARKS,
    ) -> BankTransferResult:
        """
        Move `amount` from the payer's account into the merchant account.
        The bank answers with a plain-text body; only the exact success
        phrase counts as a completed transfer. No retries.
        """
        url = f"{self.base_url}/transaction/transferByAccount"
        payload = {
            "fromAccountNumber": from_account,
            "toAccountNumber": self.merchant_account,
            "amount": amount,
            "remarks": remarks,
        }

        try:
            response = requests.post(url, json=payload, timeout=self.timeout)
        except requests.RequestException as e:
            logger.error(f"Bank gateway unreachable: {e}")
            return BankTransferResult(
                success=False,
                message="Bank payment processing failed. Please try again.",
            )

        body = (response.text or "").strip()
        if body == AppConstants.BANK_SUCCESS_RESPONSE:
            logger.info(f"Bank transfer of {amount} from {from_account} succeeded")
            return BankTransferResult(success=True, message=body)

        logger.warning(
            f"Bank transfer from {from_account} declined "
            f"(HTTP {response.status_code}): {body}"
        )
        return BankTransferResult(success=False, message=body or "Bank payment failed")
