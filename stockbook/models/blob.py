"""
Key-value blob table backing the persistence adapter
"""
from stockbook.extensions import db
from stockbook.models.base import BaseModel
from datetime import datetime


class KeyValueBlob(BaseModel):
    __tablename__ = 'blob_store'

    id = db.Column(db.Integer, primary_key=True)
    key = db.Column(db.String(100), unique=True, nullable=False, index=True)
    value = db.Column(db.Text, nullable=False)  # JSON document
    updated_at = db.Column(db.DateTime, default=datetime.utcnow, onupdate=datetime.utcnow, nullable=False)

    @staticmethod
    def get_value(key, default=None):
        """Get raw stored text by key"""
        blob = KeyValueBlob.query.filter_by(key=key).first()
        return blob.value if blob else default

    @staticmethod
    def set_value(key, value):
        """Set or replace the stored text for key"""
        blob = KeyValueBlob.query.filter_by(key=key).first()
        if blob:
            blob.value = value
        else:
            blob = KeyValueBlob(key=key, value=value)
            db.session.add(blob)
        db.session.commit()

    def __repr__(self):
        return f'<KeyValueBlob {self.key} ({len(self.value or "")} chars)>'
