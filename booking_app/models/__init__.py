from booking_app.models.user import User, UserRole
from booking_app.models.barbershop import Barbershop, BarbershopService
from booking_app.models.booking import Booking
from booking_app.models.log import Log
from booking_app.models.login_attempt import LoginAttempt
