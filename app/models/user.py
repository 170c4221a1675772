from app.extensions import db, bcrypt
from .base import TimestampMixin, generate_id

ROLES = ('patient', 'doctor', 'caretaker', 'medical-assistant')
PROVIDER_ROLES = ('doctor', 'caretaker')


class User(db.Model, TimestampMixin):
    __tablename__ = 'users'

    id = db.Column(db.String(36), primary_key=True, default=generate_id)
    name = db.Column(db.String(120), nullable=False)
    email = db.Column(db.String(120), unique=True, nullable=False, index=True)
    password_hash = db.Column(db.String(255), nullable=False)

    # Role - 'patient', 'doctor', 'caretaker', 'medical-assistant'
    role = db.Column(db.String(20), nullable=False, index=True)

    # Profile
    specialization = db.Column(db.String(120))
    experience = db.Column(db.String(50))
    languages = db.Column(db.JSON, default=list)
    bio = db.Column(db.Text)
    gender = db.Column(db.String(20))
    phone = db.Column(db.String(20))
    profile_image = db.Column(db.String(500))
    verified = db.Column(db.Boolean, default=False, nullable=False)
    rating = db.Column(db.Float)
    available = db.Column(db.Boolean)

    # Location
    address = db.Column(db.String(255))
    city = db.Column(db.String(100))
    state = db.Column(db.String(100))
    zip_code = db.Column(db.String(20))
    country = db.Column(db.String(100))
    latitude = db.Column(db.Float)
    longitude = db.Column(db.Float)

    # Weekly availability template: [{"day": "monday", "slots": ["09:00", "10:00"]}, ...]
    available_slots = db.Column(db.JSON)

    # Caretaker
    transportation_type = db.Column(db.String(50))
    available_days = db.Column(db.JSON)

    # Medical assistant
    medical_id = db.Column(db.String(64))
    internship_certificate = db.Column(db.String(500))
    digilocker_verified = db.Column(db.Boolean)

    def set_password(self, password):
        """Hash and set password"""
        self.password_hash = bcrypt.generate_password_hash(password).decode('utf-8')

    def check_password(self, password):
        """Check if provided password matches hash"""
        return bcrypt.check_password_hash(self.password_hash, password)

    def is_provider(self):
        return self.role in PROVIDER_ROLES

    def to_dict(self):
        """Public representation, never includes the password hash."""
        return {
            'id': self.id,
            'name': self.name,
            'email': self.email,
            'role': self.role,
            'specialization': self.specialization,
            'experience': self.experience,
            'languages': self.languages or [],
            'bio': self.bio,
            'gender': self.gender,
            'phone': self.phone,
            'profile_image': self.profile_image,
            'verified': self.verified,
            'rating': self.rating,
            'available': self.available,
            'address': self.address,
            'city': self.city,
            'state': self.state,
            'zip_code': self.zip_code,
            'country': self.country,
            'latitude': self.latitude,
            'longitude': self.longitude,
            'available_slots': self.available_slots,
            'transportation_type': self.transportation_type,
            'available_days': self.available_days,
            'medical_id': self.medical_id,
            'internship_certificate': self.internship_certificate,
            'digilocker_verified': self.digilocker_verified,
            'created_at': self.created_at.isoformat() if self.created_at else None,
            'updated_at': self.updated_at.isoformat() if self.updated_at else None,
        }

    def __repr__(self):
        return f"<User {self.email} ({self.name}) - {self.role}>"
