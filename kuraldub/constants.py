"""All magic values and configuration constants."""

BLOCK_DELIMITER = "---"                 # separates transcript entries
DEFAULT_SPEAKER = "Unknown"             # speaker when the block has no Speaker: line
DEFAULT_EMOTION = "Neutral"             # emotion when the block has no Emotion: line
DECODE_FAILURE_MESSAGE = (
    "Parsing Error: AI output didn't follow the timestamped script format "
    "(no '[START – END]' entries found)."
)
SCRIPT_FORMATS = ("tamil", "tanglish")  # export formats: spoken vs phonetic text
DEFAULT_SCRIPT_FORMAT = "tamil"
EXPORT_HEADER = "KURALDUB PRO - OFFICIAL DUBBING SCRIPT"
EXPORT_SEPARATOR = "=" * 50
CLIP_BITRATE = "128k"                   # reference clip MP3 bitrate
CLIP_FORMAT = "mp3"
OUTPUT_DIR = "output"
VERSION = "0.1.0"

# Instructions handed to the generation service. The decoder expects exactly
# this entry layout.
SCRIPT_PROMPT = """You are a PROFESSIONAL Tamil Lip-Sync Dubbing Script Generator.
GOAL: Generate FULL VIDEO Tamil dubbing script from start to end (00:00 to END).

CRITICAL RULES:
1. ANALYZE THE ENTIRE VIDEO. Do not stop after 30 seconds.
2. EVERY SPOKEN WORD must be converted into Tamil script. No skipping.
3. Be granular: one entry per spoken line or visual beat.
4. SYLLABLE MATCHING: Match mouth movement using Kollywood style.
5. SPOKEN TAMIL: Use natural day-to-day spoken Tamil. Avoid formal words.
6. MULTIPLE SPEAKERS: Automatically detect and name different speakers.

OUTPUT FORMAT (MANDATORY):
[START_TIME – END_TIME]
Speaker: <Name>
Original Meaning: <Meaning>
Emotion: <Mood>
Action Description: <If no speech, describe visuals>
S: <Spoken Tamil>
T: <Tanglish>
L: <Short Sync Version>
---"""
