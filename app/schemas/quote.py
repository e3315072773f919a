from pydantic import BaseModel


class PriceResolution(BaseModel):
    symbol: str
    price: float
    source: str
    synthetic: bool = False


class StockQuote(BaseModel):
    stock: str
    price: float
    likes: int


class RelativeStockQuote(BaseModel):
    stock: str
    price: float
    rel_likes: int


class SingleStockResponse(BaseModel):
    stockData: StockQuote


class ComparisonResponse(BaseModel):
    stockData: list[RelativeStockQuote]
