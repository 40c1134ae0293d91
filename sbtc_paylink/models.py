"""
Data models for the sBTC payment-link SDK.
"""
from enum import Enum
from typing import Dict, Any, Optional, List
from pydantic import BaseModel, ConfigDict, Field


class NetworkClass(str, Enum):
    """Network class denoted by the two-letter address prefix"""
    MAINNET = "SP"
    TESTNET = "ST"
    CONTRACT = "SM"


class PaymentIntent(BaseModel):
    """
    A requested payment: amount, recipient and optional label/message.

    Every field is optional so that a decoded URL with missing parameters
    still materializes; use :meth:`is_encodable` or the validators before
    acting on it.
    """
    model_config = ConfigDict(frozen=True)

    amount: Optional[str] = None
    recipient: Optional[str] = None
    label: Optional[str] = None
    message: Optional[str] = None

    def is_encodable(self) -> bool:
        """True when :func:`~sbtc_paylink.codec.encode` would accept this intent"""
        from .validation import is_valid_amount, is_valid_address
        recipient = self.recipient.strip() if isinstance(self.recipient, str) else self.recipient
        return is_valid_amount(self.amount) and is_valid_address(recipient)

    def network_class(self) -> Optional[NetworkClass]:
        """Network class of the recipient, or None if it is not a valid address"""
        from .validation import network_class_for
        return network_class_for(self.recipient)


class _ApiModel(BaseModel):
    """Base for Stacks API payloads; unknown fields are ignored"""
    model_config = ConfigDict(extra="ignore", populate_by_name=True)


class StxBalance(_ApiModel):
    """STX balance section of an address balance response (micro-STX strings)"""
    balance: str = "0"
    total_sent: str = "0"
    total_received: str = "0"
    lock_tx_id: str = ""
    locked: str = "0"
    lock_height: int = 0
    burnchain_lock_height: int = 0
    burnchain_unlock_height: int = 0


class AddressBalance(_ApiModel):
    """Balances held by an address"""
    stx: StxBalance = Field(default_factory=StxBalance)
    fungible_tokens: Dict[str, Any] = Field(default_factory=dict)
    non_fungible_tokens: Dict[str, Any] = Field(default_factory=dict)


class TokenTransfer(_ApiModel):
    """Payload of a token_transfer transaction"""
    recipient_address: str
    amount: str = "0"
    memo: Optional[str] = None


class Transaction(_ApiModel):
    """A transaction as returned by the Stacks extended API"""
    tx_id: str
    tx_status: str
    tx_type: str
    fee_rate: str = "0"
    sender_address: str = ""
    sponsored: bool = False
    block_hash: str = ""
    block_height: int = 0
    burn_block_time: int = 0
    canonical: bool = True
    anchor_mode: str = ""
    token_transfer: Optional[TokenTransfer] = None
    events: List[Dict[str, Any]] = Field(default_factory=list)


class TransactionList(_ApiModel):
    """A page of transactions for an address"""
    limit: int
    offset: int
    total: int
    results: List[Transaction] = Field(default_factory=list)


class NetworkInfo(_ApiModel):
    """Node information from ``/v2/info``"""
    peer_version: Optional[int] = None
    burn_block_height: Optional[int] = None
    stacks_tip_height: Optional[int] = None
    stacks_tip: Optional[str] = None
    server_version: Optional[str] = None
    network_id: Optional[int] = None
    parent_network_id: Optional[int] = None


class BalanceCheck(_ApiModel):
    """Result of checking whether an address can cover a payment"""
    sufficient: bool
    current_balance: str
    error: Optional[str] = None
