### models/__init__.py
from .base import Base
from .admin import Admin
from .make import Make
from .car import Car, CAR_CONDITIONS
from .car_image import CarImage
from .news import News
from .seasonal_offer import SeasonalOffer
from .partner import Partner
from .faq import FAQ
from .feedback import Feedback
from .site_content import (
    HomePageImages,
    SocialLinks,
    TermsAndConditions,
    WhatWeDo,
    HOME_IMAGE_SLOTS,
    SINGLETON_ID,
)
