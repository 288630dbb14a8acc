import logging

from src.config import configure_logging
from .database import engine, Base
from . import models  # noqa: F401  (테이블 등록)

logger = logging.getLogger("provisioner.db_init")


def initialize_db():
    """
    DB와 테이블을 생성합니다.
    프로젝트 데이터 자체는 ProjectService를 통해서만 생성되어야 하므로 기본 데이터는 넣지 않습니다.
    """
    logger.info("Initializing database schema...")

    # 모든 테이블을 생성합니다. (이미 존재하면 생성하지 않음)
    Base.metadata.create_all(bind=engine)
    logger.info(f"Tables ready: {', '.join(sorted(Base.metadata.tables))}")


if __name__ == '__main__':
    configure_logging()
    initialize_db()
