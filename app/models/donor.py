from sqlalchemy import Column, Integer, String, Date
from app.database.database import Base
from app.services.donor_rules import calculate_age

class Donor(Base):
    __tablename__ = "donors"

    id = Column(Integer, primary_key=True, index=True)
    full_name = Column(String, nullable=False)
    phone = Column(String, nullable=False)
    birth_date = Column(Date, nullable=False)
    gender = Column(String, nullable=False)
    address = Column(String, nullable=True)
    generated_id = Column(String, unique=True, index=True, nullable=False)
    number_of_donations = Column(Integer, nullable=False, default=0)

    @property
    def age(self):
        """Age in whole years, derived from birth_date at read time."""
        if self.birth_date is None:
            return None
        return calculate_age(self.birth_date)

    def __repr__(self):
        return f"<Donor id={self.id} generated_id={self.generated_id!r}>"
