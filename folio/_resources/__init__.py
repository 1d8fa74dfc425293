"""Resource namespaces for the portfolio API."""

from .about import AboutProfiles
from .auth import Auth
from .certificates import Certificates
from .contact import Contact
from .projects import Projects
from .skills import Skills
from .timeline import Timeline
from .uploads import Uploads

__all__ = [
    "AboutProfiles",
    "Auth",
    "Certificates",
    "Contact",
    "Projects",
    "Skills",
    "Timeline",
    "Uploads",
]
