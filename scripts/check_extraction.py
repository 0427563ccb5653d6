import os
from dotenv import load_dotenv

# Load environment variables
load_dotenv()

from relieflink.core.severity import score_urgency
from relieflink.services.extraction import FALLBACK_EXTRACTION, GeminiExtractor

# LangSmith will auto-trace if LANGCHAIN_* env vars are set
extractor = GeminiExtractor(
    api_key=os.getenv("GOOGLE_API_KEY"),
    model=os.getenv("GEMINI_MODEL", "gemini-2.5-flash"),
)

print("Testing Gemini extraction...\n")

samples = [
    "Need ambulance at T. Nagar, elderly man unconscious",
    "Family of 5 stranded near Velachery, water rising, need shelter",
]

for message in samples:
    result = extractor.extract(message)
    status = "⚠️ Fallback" if result == FALLBACK_EXTRACTION else "✅ Extracted"
    print(f"{status}: {message}")
    print(f"   {result.model_dump()}")
    print(f"   urgency_score={score_urgency(result.urgency_level, message)}")
    print("\n" + "=" * 50 + "\n")

print("🎯 Check LangSmith dashboard: https://smith.langchain.com")
print("   Project: relieflink")
