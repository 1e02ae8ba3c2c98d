from sqlalchemy import Column, String, Text, Boolean, Date, DateTime, Enum
import enum

from dancey_portal.models.base_model import Base, new_uuid, utc_now


class NewsStatus(str, enum.Enum):
    published = "published"
    draft = "draft"


class News(Base):
    __tablename__ = "latest_news"

    id = Column(String(36), primary_key=True, default=new_uuid)
    title = Column(String(200), nullable=False)
    content = Column(Text, nullable=False)
    image_url = Column(String(500))
    publish_date = Column(Date)
    status = Column(Enum(NewsStatus, name="news_status_enum"), default=NewsStatus.draft, nullable=False)
    category = Column(String(50))
    is_pinned = Column(Boolean, default=False, nullable=False)
    created_at = Column(DateTime(timezone=True), default=utc_now, nullable=False)
    updated_at = Column(DateTime(timezone=True), default=utc_now, onupdate=utc_now, nullable=False)

    def __repr__(self):
        return f"<News(title='{self.title}', status={self.status})>"
