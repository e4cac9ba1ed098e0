"""Market data endpoints backed by the NSE client."""

from typing import Any

from fastapi import APIRouter, Depends, Query

from livefolio.api.deps import get_market_data_service, get_nse_client
from livefolio.api.schemas import QuoteResponse, SymbolListResponse
from livefolio.providers import NseClient
from livefolio.services import MarketDataService

router = APIRouter(prefix="/market", tags=["market"])


@router.get("/symbols", response_model=SymbolListResponse)
async def list_symbols(nse: NseClient = Depends(get_nse_client)) -> SymbolListResponse:
    """List every symbol in the pre-open market feed."""
    symbols = await nse.get_all_stock_symbols()
    return SymbolListResponse(symbols=symbols, count=len(symbols))


@router.get("/quote/{symbol}", response_model=QuoteResponse)
async def get_quote(
    symbol: str,
    market_data: MarketDataService = Depends(get_market_data_service),
) -> QuoteResponse:
    """Get a normalized quote for one symbol."""
    quote = await market_data.get_quote(symbol)
    return QuoteResponse.model_validate(quote)


@router.get("/equity/{symbol}")
async def get_equity_details(symbol: str, nse: NseClient = Depends(get_nse_client)) -> dict[str, Any]:
    """Raw equity details."""
    return await nse.get_equity_details(symbol)


@router.get("/equity/{symbol}/trade-info")
async def get_equity_trade_info(symbol: str, nse: NseClient = Depends(get_nse_client)) -> dict[str, Any]:
    return await nse.get_equity_trade_info(symbol)


@router.get("/equity/{symbol}/corporate-info")
async def get_equity_corporate_info(symbol: str, nse: NseClient = Depends(get_nse_client)) -> dict[str, Any]:
    return await nse.get_equity_corporate_info(symbol)


@router.get("/equity/{symbol}/intraday")
async def get_equity_intraday(symbol: str, nse: NseClient = Depends(get_nse_client)) -> dict[str, Any]:
    """Intraday price series for an equity."""
    return await nse.get_equity_intraday_data(symbol)


@router.get("/equity/{symbol}/option-chain")
async def get_equity_option_chain(symbol: str, nse: NseClient = Depends(get_nse_client)) -> dict[str, Any]:
    return await nse.get_equity_option_chain(symbol)


@router.get("/index/{index}/intraday")
async def get_index_intraday(
    index: str,
    pre_open: bool = Query(False, description="Return the pre-open snapshot instead"),
    nse: NseClient = Depends(get_nse_client),
) -> dict[str, Any]:
    """Intraday series (or pre-open data) for an index such as 'NIFTY 50'."""
    return await nse.get_index_intraday_data(index, pre_open=pre_open)


@router.get("/index/{index}/option-chain")
async def get_index_option_chain(index: str, nse: NseClient = Depends(get_nse_client)) -> dict[str, Any]:
    return await nse.get_index_option_chain(index)
