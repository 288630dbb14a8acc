from typing import Optional
from sqlalchemy.orm import Session
from src.database import models
from src.repositories.interfaces import ICustomerRepository

class SqlalchemyCustomerRepository(ICustomerRepository):
    def __init__(self, db_session: Session):
        self.db = db_session

    def find_by_id(self, customer_id: int) -> Optional[models.Customer]:
        return self.db.query(models.Customer).filter(models.Customer.id == customer_id).first()
