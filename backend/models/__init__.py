# backend/models/__init__.py
# import every table so Base.metadata.create_all sees them

from models.user import User
from models.humanized_text import HumanizedText
from models.converted_file import ConvertedFile
