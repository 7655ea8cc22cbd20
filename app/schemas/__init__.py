# Schemas package (re-export feature modules for stable imports)
from .common.common import *
from .auth.auth import *
from .categories.category import *
from .artworks.artwork import *
from .settings.settings import *
from .contact.contact import *
from .uploads.upload import *
