from core.image_processor import validate_image, process_upload, create_thumbnail  # noqa: F401
from core.pricing_analyzer import analyze_image, parse_analysis, AnalysisError  # noqa: F401
from core.chat_agent import handle_chat_message  # noqa: F401
from core.auth import hash_password, verify_credentials  # noqa: F401
