"""
Article Model
"""

from datetime import datetime, timezone

from rampur_news.errors import CMSError
from rampur_news.extensions import db
from rampur_news.services.seo import get_category_hindi


def utcnow():
    """Naive UTC timestamp, matching how the columns are stored."""
    return datetime.now(timezone.utc).replace(tzinfo=None)


class Article(db.Model):
    """News article stored by the local provider"""
    __tablename__ = 'articles'

    id = db.Column(db.Integer, primary_key=True)
    title = db.Column(db.String(300), nullable=False)
    slug = db.Column(db.String(300), nullable=False, unique=True, index=True)
    category = db.Column(db.String(64), nullable=False, index=True)
    content = db.Column(db.Text, default='')
    excerpt = db.Column(db.Text, default='')
    author = db.Column(db.String(120))
    image = db.Column(db.String(500))
    status = db.Column(db.String(20), default='published', index=True)
    is_featured = db.Column(db.Boolean, default=False)
    is_breaking = db.Column(db.Boolean, default=False)
    views = db.Column(db.Integer, default=0)
    tags = db.Column(db.JSON, default=list)
    seo_title = db.Column(db.String(300))
    seo_description = db.Column(db.String(500))
    published_at = db.Column(db.DateTime, default=utcnow)
    modified_at = db.Column(db.DateTime, default=utcnow, onupdate=utcnow)

    # frontend field name -> column
    FIELD_MAP = {
        'title': 'title',
        'slug': 'slug',
        'category': 'category',
        'content': 'content',
        'excerpt': 'excerpt',
        'author': 'author',
        'image': 'image',
        'status': 'status',
        'featured': 'is_featured',
        'breaking': 'is_breaking',
        'views': 'views',
        'tags': 'tags',
        'seoTitle': 'seo_title',
        'seoDescription': 'seo_description',
    }

    def apply(self, values):
        """Copy known frontend fields from `values` onto the row."""
        for key, column in self.FIELD_MAP.items():
            if key in values:
                setattr(self, column, values[key])
        for key, column in (('publishedDate', 'published_at'), ('modifiedDate', 'modified_at')):
            if values.get(key):
                try:
                    when = datetime.fromisoformat(str(values[key]).replace('Z', '+00:00'))
                except ValueError:
                    raise CMSError(f'Invalid {key}: {values[key]}', 400)
                setattr(self, column, when.replace(tzinfo=None))

    def to_dict(self):
        return {
            'id': str(self.id),
            'title': self.title,
            'slug': self.slug,
            'category': self.category,
            'categoryHindi': get_category_hindi(self.category),
            'content': self.content or '',
            'excerpt': self.excerpt or '',
            'author': self.author,
            'image': self.image,
            'status': self.status,
            'featured': bool(self.is_featured),
            'breaking': bool(self.is_breaking),
            'views': self.views or 0,
            'tags': list(self.tags or []),
            'seoTitle': self.seo_title,
            'seoDescription': self.seo_description,
            'publishedDate': self.published_at.isoformat() + 'Z' if self.published_at else None,
            'modifiedDate': self.modified_at.isoformat() + 'Z' if self.modified_at else None,
        }

    def __repr__(self):
        return f'<Article {self.slug}>'
