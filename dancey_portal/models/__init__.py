from .admin_user_model import AdminUser
from .instructor_model import Instructor
from .class_model import DanceClass
from .membership_model import Membership
from .class_pack_model import ClassPack
from .promotion_model import Promotion
from .news_model import News
from .enrollment_model import Enrollment
from .rating_model import Rating
from .checkin_model import ClassCheckin

# Join tables
from .association_tables import ClassMembership, ClassPackClass, InstructorClass
