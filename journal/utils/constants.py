"""Shared constants and defaults, including the static instrument table."""

VALID_INTERVALS = ["1m", "5m", "15m", "30m", "1h", "2h", "4h", "8h", "1d"]

# Interval to hours mapping for APScheduler
INTERVAL_HOURS: dict[str, float] = {
    "1m": 1 / 60,
    "5m": 5 / 60,
    "15m": 0.25,
    "30m": 0.5,
    "1h": 1.0,
    "2h": 2.0,
    "4h": 4.0,
    "8h": 8.0,
    "1d": 24.0,
}

CATEGORIES = ("forex", "indices", "commodities", "crypto")

# Signals carry no close time, so their duration is an estimate, not a measurement.
SIGNAL_DURATION_ESTIMATE_HOURS = 48.0

# Statuses whose trades count as finished for journal statistics
CLOSED_STATUSES = ("CLOSED", "LOSS", "BREAKEVEN")

# Fallback instrument metadata used when the instrument table is unavailable
# or does not know a symbol. Indices quote pip_size in points per pip.
STATIC_INSTRUMENTS: list[dict] = [
    # Forex majors and crosses
    {"symbol": "EURUSD", "name": "Euro vs US Dollar", "category": "forex", "pip_size": 0.0001, "pip_value": 10.0},
    {"symbol": "GBPUSD", "name": "British Pound vs US Dollar", "category": "forex", "pip_size": 0.0001, "pip_value": 10.0},
    {"symbol": "USDJPY", "name": "US Dollar vs Japanese Yen", "category": "forex", "pip_size": 0.01, "pip_value": 10.0},
    {"symbol": "AUDUSD", "name": "Australian Dollar vs US Dollar", "category": "forex", "pip_size": 0.0001, "pip_value": 10.0},
    {"symbol": "USDCAD", "name": "US Dollar vs Canadian Dollar", "category": "forex", "pip_size": 0.0001, "pip_value": 10.0},
    {"symbol": "NZDUSD", "name": "New Zealand Dollar vs US Dollar", "category": "forex", "pip_size": 0.0001, "pip_value": 10.0},
    {"symbol": "EURGBP", "name": "Euro vs British Pound", "category": "forex", "pip_size": 0.0001, "pip_value": 10.0},
    {"symbol": "EURJPY", "name": "Euro vs Japanese Yen", "category": "forex", "pip_size": 0.01, "pip_value": 10.0},
    {"symbol": "GBPJPY", "name": "British Pound vs Japanese Yen", "category": "forex", "pip_size": 0.01, "pip_value": 10.0},
    {"symbol": "AUDJPY", "name": "Australian Dollar vs Japanese Yen", "category": "forex", "pip_size": 0.01, "pip_value": 10.0},
    # Indices
    {"symbol": "US30", "name": "Dow Jones Industrial Average", "category": "indices", "pip_size": 2.0, "pip_value": 2.0},
    {"symbol": "SPX500", "name": "S&P 500", "category": "indices", "pip_size": 2.0, "pip_value": 2.0},
    {"symbol": "NAS100", "name": "NASDAQ 100", "category": "indices", "pip_size": 2.0, "pip_value": 2.0},
    {"symbol": "UK100", "name": "FTSE 100", "category": "indices", "pip_size": 1.0, "pip_value": 1.0},
    {"symbol": "GER30", "name": "DAX 30", "category": "indices", "pip_size": 1.0, "pip_value": 1.0},
    {"symbol": "FRA40", "name": "CAC 40", "category": "indices", "pip_size": 1.0, "pip_value": 1.0},
    {"symbol": "JPN225", "name": "Nikkei 225", "category": "indices", "pip_size": 1.0, "pip_value": 1.0},
    {"symbol": "AUS200", "name": "ASX 200", "category": "indices", "pip_size": 1.0, "pip_value": 1.0},
    # Commodities
    {"symbol": "XAUUSD", "name": "Gold vs US Dollar", "category": "commodities", "pip_size": 0.1, "pip_value": 0.1},
    {"symbol": "XAGUSD", "name": "Silver vs US Dollar", "category": "commodities", "pip_size": 0.01, "pip_value": 0.01},
    {"symbol": "XPTUSD", "name": "Platinum vs US Dollar", "category": "commodities", "pip_size": 0.1, "pip_value": 0.1},
    {"symbol": "XPDUSD", "name": "Palladium vs US Dollar", "category": "commodities", "pip_size": 0.1, "pip_value": 0.1},
    {"symbol": "USOIL", "name": "Crude Oil WTI", "category": "commodities", "pip_size": 0.01, "pip_value": 0.01},
    {"symbol": "UKOIL", "name": "Crude Oil Brent", "category": "commodities", "pip_size": 0.01, "pip_value": 0.01},
    {"symbol": "NATGAS", "name": "Natural Gas", "category": "commodities", "pip_size": 0.001, "pip_value": 0.001},
    # Crypto
    {"symbol": "BTCUSD", "name": "Bitcoin vs US Dollar", "category": "crypto", "pip_size": 1.0, "pip_value": 1.0},
    {"symbol": "ETHUSD", "name": "Ethereum vs US Dollar", "category": "crypto", "pip_size": 0.01, "pip_value": 0.01},
    {"symbol": "LTCUSD", "name": "Litecoin vs US Dollar", "category": "crypto", "pip_size": 0.01, "pip_value": 0.01},
    {"symbol": "XRPUSD", "name": "Ripple vs US Dollar", "category": "crypto", "pip_size": 0.0001, "pip_value": 0.0001},
    {"symbol": "ADAUSD", "name": "Cardano vs US Dollar", "category": "crypto", "pip_size": 0.0001, "pip_value": 0.0001},
    {"symbol": "DOTUSD", "name": "Polkadot vs US Dollar", "category": "crypto", "pip_size": 0.01, "pip_value": 0.01},
]
