from sqlalchemy import Column, Integer, Text, UniqueConstraint
from portfolio_tracker.database import Base


class Price(Base):
    __tablename__ = "prices"
    __table_args__ = (
        UniqueConstraint("ticker", "date", name="uq_prices_ticker_date"),
        # never reissue ids of deleted rows on SQLite
        {"sqlite_autoincrement": True},
    )

    id = Column(Integer, primary_key=True)
    ticker = Column(Text, nullable=False)
    date = Column(Text, nullable=False)  # ISO-8601, e.g. '2024-01-02'
    price = Column(Text, nullable=False)  # decimal string, e.g. '185.64'

    def __repr__(self):
        return f"<Price id={self.id} {self.ticker} {self.date} {self.price}>"
