from core.security import verify_password
from db.seed.user_seeder import AdminSeeder
from models.enums import UserRole
from models.user import User


def test_admin_seeder_creates_then_updates(db):
    admin = AdminSeeder(db).seed(username="bootstrap", password="FirstPass1", name="Bootstrap")

    assert admin.role == UserRole.admin
    assert verify_password("FirstPass1", admin.hashed_password)

    # Demoted account is promoted again and gets the new password
    admin.role = UserRole.user
    db.commit()

    again = AdminSeeder(db).seed(username="bootstrap", password="SecondPass2")

    assert again.id == admin.id
    assert again.role == UserRole.admin
    assert verify_password("SecondPass2", again.hashed_password)
    assert db.query(User).filter(User.username == "bootstrap").count() == 1
