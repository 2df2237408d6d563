"""TradeGrid quote backend."""
