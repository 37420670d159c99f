"""Configuration settings for the policy retrieval engine."""

# Directory paths
INPUT_DOCUMENTS_DIR = "data/policies"
SUPPORTED_DOCUMENT_PATTERNS = ("*.pdf", "*.docx", "*.txt")

# Retrieval settings
DEFAULT_MAX_RESULTS = 5  # Ranked sections handed to the context assembler
DEFAULT_MIN_SCORE = 5.0  # Sections must score strictly above this
DEFAULT_GENERAL_CONTEXT_SECTIONS = 5  # One per document when nothing matches

# Context settings
DEFAULT_MAX_CONTEXT_CHARS = 40000  # Budget for the assembled context
DEFAULT_LLM_CONTEXT_CHARS = 50000  # Hard bound at the model boundary

# Document processing settings
DEFAULT_MAX_DOCUMENTS = 8  # Documents processed per request
DEFAULT_EXTRACTION_WORKERS = 4
DEFAULT_CHUNK_SIZE = 1000  # Page chunks for pages without any headings
DEFAULT_POLICY_CONTEXT_BEFORE = 500
DEFAULT_POLICY_CONTEXT_AFTER = 1000

# Model Settings
DEFAULT_MODEL_NAME = "mistral"
DEFAULT_OLLAMA_URL = "http://localhost:11434"
DEFAULT_LLM_TIMEOUT = 30  # Seconds
DEFAULT_TEMPERATURE = 0.1
DEFAULT_MAX_TOKENS = 800
ASSISTANT_NAME = "Poli"
