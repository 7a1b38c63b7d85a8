from sqlalchemy import Column, Index, Integer, Text

from urlshortener.database import Base


class URLMapping(Base):
    __tablename__ = "url"

    id = Column(Integer, primary_key=True)
    alias = Column(Text, unique=True, nullable=False)
    target_url = Column("url", Text, nullable=False)

    __table_args__ = (Index("idx_alias", "alias"),)

    def __repr__(self) -> str:
        return f"<URLMapping id={self.id} alias={self.alias!r}>"
