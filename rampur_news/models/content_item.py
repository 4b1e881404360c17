"""
Content Item Model

One row per extended content item (exam, result, institution, holiday,
restaurant, fashion store, shopping centre, famous place, event). The
collection-specific fields live in `data`; the columns hold what the
local provider filters and sorts on.
"""

from rampur_news.extensions import db


class ContentItem(db.Model):
    """Extended content item, unique by slug within its collection"""
    __tablename__ = 'content_items'
    __table_args__ = (db.UniqueConstraint('collection', 'slug', name='uq_content_items_collection_slug'),)

    id = db.Column(db.Integer, primary_key=True)
    collection = db.Column(db.String(40), nullable=False, index=True)
    slug = db.Column(db.String(300), nullable=False)
    date = db.Column(db.String(32), index=True)
    is_featured = db.Column(db.Boolean, default=False)
    data = db.Column(db.JSON, nullable=False, default=dict)

    def to_dict(self):
        record = dict(self.data or {})
        record.update({'id': str(self.id), 'slug': self.slug, 'isFeatured': bool(self.is_featured)})
        return record

    def __repr__(self):
        return f'<ContentItem {self.collection}/{self.slug}>'
