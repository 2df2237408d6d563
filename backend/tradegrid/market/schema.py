"""GraphQL schema for the stock query surface, served with strawberry."""

import strawberry
from strawberry.fastapi import GraphQLRouter
from strawberry.types import Info

from .models import Quote
from .query import StockQuery


@strawberry.type(description="Latest known quote for one symbol.")
class Stock:
    symbol: str
    price: float
    volume: int | None
    timestamp: str
    change: float | None
    change_percent: float | None


def _to_stock(quote: Quote) -> Stock:
    return Stock(
        symbol=quote.symbol,
        price=quote.price,
        volume=quote.volume,
        timestamp=quote.iso_timestamp,
        change=quote.change,
        change_percent=quote.change_percent,
    )


def _stock_query(info: Info) -> StockQuery:
    return info.context["stock_query"]


@strawberry.type
class Query:
    @strawberry.field(description="One entry per requested symbol. Unknown symbols come back zeroed.")
    def stocks(self, info: Info, symbols: list[str]) -> list[Stock]:
        return [_to_stock(quote) for quote in _stock_query(info).get_stocks(symbols)]

    @strawberry.field(description="Quote for one symbol, or null if it has never been seen.")
    def stock(self, info: Info, symbol: str) -> Stock | None:
        quote = _stock_query(info).get_stock(symbol)
        return _to_stock(quote) if quote is not None else None

    @strawberry.field(description="Every quote in the store.")
    def all_stocks(self, info: Info) -> list[Stock]:
        return [_to_stock(quote) for quote in _stock_query(info).get_all_stocks()]


schema = strawberry.Schema(query=Query)


def create_graphql_router(query: StockQuery, path: str = "/graphql") -> GraphQLRouter:
    """Create the GraphQL router; resolvers read through ``query``."""

    async def get_context() -> dict:
        return {"stock_query": query}

    return GraphQLRouter(schema, path=path, context_getter=get_context)
