from sqlalchemy.orm import Session
from pdv.models import User

def get_user_by_username(db: Session, username: str):
    """Busca um funcionário ativo pelo username."""
    return db.query(User).filter(User.username == username, User.is_active == True).first()
