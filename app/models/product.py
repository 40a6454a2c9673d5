# app/models/product.py
"""
Product catalog table. `code` is the article number used to match
spreadsheet imports; it is not unique and may be blank.
"""

from sqlalchemy import Column, Integer, String, Float
from app.database import Base


class ProductRecord(Base):
    __tablename__ = "products"

    id = Column(String(64), primary_key=True)
    position = Column(Integer, nullable=False, index=True)
    code = Column(String(100), index=True)
    brand = Column(String(100))
    name = Column(String(300), nullable=False, index=True)
    buy_price = Column(Float, default=0, nullable=False)
    sell_price = Column(Float, default=0, nullable=False)

    def __repr__(self):
        return f"<ProductRecord {self.id} code={self.code} name={self.name}>"
