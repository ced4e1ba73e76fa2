from .env import load_project_dotenv  # noqa: F401
from .logger import get_logger  # noqa: F401
from .openai_utils import safe_chat_completion  # noqa: F401

# Load the project-level .env once utils is imported.
load_project_dotenv()
