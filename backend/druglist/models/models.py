"""
SQLAlchemy ORM models – the drugs table.
Column names keep the camelCase layout existing drugs.db files use.
"""

from druglist.database import db


class Drug(db.Model):
    __tablename__ = "drugs"

    id = db.Column(db.Integer, primary_key=True, autoincrement=True)
    code = db.Column("code", db.Text, nullable=False)
    generic_name = db.Column("genericName", db.Text, nullable=False)
    brand_name = db.Column("brandName", db.Text, nullable=False)
    company = db.Column("company", db.Text, nullable=False, index=True)
    launch_date = db.Column("launchDate", db.Text, nullable=False)     # ISO-8601 string

    __table_args__ = {"sqlite_autoincrement": True}

    @property
    def display_name(self) -> str:
        return f"{self.generic_name} ({self.brand_name})"

    def to_dict(self):
        return {
            "id": self.id,
            "code": self.code,
            "name": self.display_name,
            "company": self.company,
            "launchDate": self.launch_date,
        }

    def to_record_dict(self):
        """Canonical camelCase form, without the store-assigned id."""
        return {
            "code": self.code,
            "genericName": self.generic_name,
            "brandName": self.brand_name,
            "company": self.company,
            "launchDate": self.launch_date,
        }
