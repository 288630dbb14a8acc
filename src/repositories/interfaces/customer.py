from abc import ABC, abstractmethod
from typing import Optional
from src.database import models

class ICustomerRepository(ABC):
    @abstractmethod
    def find_by_id(self, customer_id: int) -> Optional[models.Customer]:
        """고유 ID로 특정 고객을 조회합니다."""
        pass
