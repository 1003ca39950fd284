"""Global enums — string values must match the contract's symbols exactly."""

from enum import Enum, IntEnum


class Side(str, Enum):
    YES = "Yes"
    NO = "No"


class MarketStatusTag(str, Enum):
    OPEN = "Open"
    RESOLVED = "Resolved"


class MarketPhase(str, Enum):
    """Derived lifecycle phase — never stored on-chain."""
    LIVE = "LIVE"            # Open and before deadline: purchases allowed
    EXPIRED = "EXPIRED"      # Open and past deadline: awaiting resolution
    RESOLVED = "RESOLVED"    # outcome set: claims allowed


class ContractMethod(str, Enum):
    CREATE_MARKET = "create_market"
    BUY_SHARES = "buy_shares"
    RESOLVE_MARKET = "resolve_market"
    CLAIM_WINNINGS = "claim_winnings"
    GET_MARKET = "get_market"
    GET_POSITION = "get_position"
    GET_MARKET_COUNT = "get_market_count"


class SendStatus(str, Enum):
    """sendTransaction status vocabulary."""
    PENDING = "PENDING"
    DUPLICATE = "DUPLICATE"
    TRY_AGAIN_LATER = "TRY_AGAIN_LATER"
    ERROR = "ERROR"


class TransactionStatus(str, Enum):
    """getTransaction status vocabulary."""
    NOT_FOUND = "NOT_FOUND"
    SUCCESS = "SUCCESS"
    FAILED = "FAILED"


class WalletState(str, Enum):
    DISCONNECTED = "DISCONNECTED"
    CONNECTING = "CONNECTING"
    ACTIVE = "ACTIVE"


class ContractErrorCode(IntEnum):
    """Error enum of the prediction-market program (contracterror repr u32)."""
    ALREADY_INITIALIZED = 1
    NOT_INITIALIZED = 2
    UNAUTHORIZED = 3
    MARKET_NOT_FOUND = 4
    MARKET_CLOSED = 5
    MARKET_NOT_RESOLVED = 6
    MARKET_ALREADY_RESOLVED = 7
    DEADLINE_NOT_REACHED = 8
    INVALID_AMOUNT = 9
    NOTHING_TO_CLAIM = 10
    ALREADY_CLAIMED = 11
    INVALID_DEADLINE = 12
