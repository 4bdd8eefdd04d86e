from sqlalchemy import Column, Integer, String, UniqueConstraint
from app.core.database import Base

class Subscriber(Base):
    __tablename__ = "subscribers"
    id = Column(Integer, primary_key=True, autoincrement=True)
    email = Column(String(255), nullable=False)

    __table_args__ = (
        UniqueConstraint('email', name='uq_subscribers_email'),
    )

    def __repr__(self) -> str:
        return f"<Subscriber id={self.id} email={self.email!r}>"
