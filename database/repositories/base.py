from sqlalchemy.orm import Session


class BaseRepository:
    """
    Every query issued through a repository is scoped by ``tenant_id``.

    The only lookups that do not take a tenant are the ones that *discover*
    it (webhook secret, email provider message id); anything written after
    such a lookup reuses the tenant of the row that was found.
    """

    def __init__(self, db: Session):
        self.db = db

    def commit(self) -> None:
        self.db.commit()

    def rollback(self) -> None:
        self.db.rollback()
