# app/system_models/ai_conversation_model/ai_conversation_model.py
from sqlalchemy import Column, String, DateTime, Text, JSON, ForeignKey
from app.database.connection import Base
from app.helpers.ids import new_id
from app.helpers.time import utcnow

class AIConversation(Base):
    __tablename__ = "ai_conversations"

    id = Column(String(36), primary_key=True, default=new_id)
    # One active transcript per user; the unique key backs the create-if-absent upsert
    user_id = Column(String(36), ForeignKey("users.id"), unique=True, nullable=False)
    user_role = Column(String, nullable=False)
    messages = Column(JSON, nullable=False, default=list)
    context = Column(Text)

    created_at = Column(DateTime(timezone=True), default=utcnow)
    updated_at = Column(DateTime(timezone=True), default=utcnow, onupdate=utcnow, index=True)

    def __repr__(self):
        return f"<AIConversation {self.id}: {len(self.messages or [])} messages>"
