"""Lookup failures raised by the journal services."""


class TradeNotFoundError(LookupError):
    def __init__(self, trade_id: str | None):
        self.trade_id = trade_id
        if trade_id is None or not str(trade_id).strip():
            message = "Trade id is blank"
        else:
            message = f"Trade {trade_id} not found"
        super().__init__(message)


class InstrumentNotFoundError(LookupError):
    def __init__(self, symbol: str | None):
        self.symbol = symbol
        super().__init__(f"Instrument {symbol!r} not found")
