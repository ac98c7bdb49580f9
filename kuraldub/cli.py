"""CLI interface with subcommand routing."""

import argparse
import logging
import os
import shutil
import sys

from pydub import AudioSegment

from kuraldub.constants import (
    OUTPUT_DIR,
    SCRIPT_FORMATS,
    DEFAULT_SCRIPT_FORMAT,
    SCRIPT_PROMPT,
    VERSION,
)
from kuraldub.parser import decode_transcript
from kuraldub.playback import AudioPlayer, seek
from kuraldub.timecode import parse_timecode
from kuraldub.exporter import export_script, export_clips
from kuraldub.artifacts import (
    init_output_dir,
    slug_from_path,
    write_artifact,
    load_artifact,
    build_script_artifact,
    load_script_lines,
    get_project_status,
    list_projects,
    clear_outputs,
    clips_fresh,
)


def _check_ffmpeg():
    """Verify ffmpeg is installed."""
    if not shutil.which("ffmpeg"):
        print("Error: ffmpeg is required but not found.", file=sys.stderr)
        print("Install with: brew install ffmpeg", file=sys.stderr)
        raise SystemExit(1)


def _get_project_dir(slug: str) -> str:
    """Get project directory path, verify it has a decoded script."""
    project_dir = os.path.join(OUTPUT_DIR, slug)
    if not os.path.exists(os.path.join(project_dir, "script.json")):
        print(f"Error: Project '{slug}' not found.", file=sys.stderr)
        print("Run 'kuraldub new <transcript>' to create a project.", file=sys.stderr)
        raise SystemExit(1)
    return project_dir


def _get_media_path(project_dir: str, slug: str) -> str:
    script = load_artifact(project_dir, "script.json") or {}
    media = script.get("media")
    if not media:
        print(f"Error: Project '{slug}' has no media file.", file=sys.stderr)
        print("Re-create it with 'kuraldub new <transcript> --media <file> --force'.", file=sys.stderr)
        raise SystemExit(1)
    if not os.path.exists(media):
        print(f"Error: Media file not found: {media}", file=sys.stderr)
        raise SystemExit(1)
    return media


def cmd_new(args):
    """Create a project by decoding a transcript file."""
    file_path = args.file

    if not os.path.exists(file_path):
        print(f"Error: File not found: {file_path}", file=sys.stderr)
        raise SystemExit(1)

    with open(file_path, encoding="utf-8") as f:
        text = f.read()

    if not text.strip():
        print(f"Error: File is empty: {file_path}", file=sys.stderr)
        raise SystemExit(1)

    if args.media and not os.path.exists(args.media):
        print(f"Error: Media file not found: {args.media}", file=sys.stderr)
        raise SystemExit(1)

    slug = slug_from_path(file_path)
    project_dir = os.path.join(OUTPUT_DIR, slug)
    if os.path.exists(os.path.join(project_dir, "script.json")) and not args.force:
        print(f"Error: Project '{slug}' already exists.", file=sys.stderr)
        print("Use --force to decode it again.", file=sys.stderr)
        raise SystemExit(1)

    result = decode_transcript(text)
    if not result.ok:
        print(f"Error: {result.error}", file=sys.stderr)
        raise SystemExit(1)

    # Clips and exports from a previous decode no longer match its lines
    cleared = clear_outputs(project_dir)
    project_dir = init_output_dir(file_path, output_base=OUTPUT_DIR)
    media = os.path.abspath(args.media) if args.media else None
    write_artifact(
        project_dir,
        "script.json",
        build_script_artifact(result.lines, os.path.abspath(file_path), media),
    )

    actions = sum(1 for line in result.lines if line.is_action)
    speakers = sorted({line.speaker for line in result.lines if not line.is_action})
    print(f"Created project: {slug}")
    print(f"Decoded {len(result.lines)} lines ({len(result.lines) - actions} dialogue, {actions} action)")
    if speakers:
        print(f"Speakers: {', '.join(speakers)}")
    if cleared:
        print(f"Cleared: {', '.join(cleared)} (from the previous decode)")
    print(f"Run 'kuraldub show {slug}' to review, or 'kuraldub export {slug}' to write the script.")


def cmd_show(args):
    """Print the decoded script."""
    project_dir = _get_project_dir(args.slug)
    lines = load_script_lines(project_dir)

    for i, line in enumerate(lines, start=1):
        print(f"#{i:<3} {line.speaker}  [{line.start_time} — {line.end_time}]  ({line.emotion})")
        if line.original_meaning:
            print(f"     Original: {line.original_meaning}")
        if line.is_action:
            print(f"     [ {line.action_description} ]")
            continue
        if args.format in (None, "tamil"):
            print(f"     S: {line.versions.spoken}")
        if args.format in (None, "tanglish"):
            print(f"     T: {line.versions.phonetic}")
        if args.format is None:
            print(f"     L: {line.versions.short_sync}")


def cmd_seek(args):
    """Play the project media from a timestamp or a line's start."""
    project_dir = _get_project_dir(args.slug)

    if args.line is not None:
        lines = load_script_lines(project_dir)
        if not 1 <= args.line <= len(lines):
            print(f"Error: Line {args.line} out of range (1-{len(lines)}).", file=sys.stderr)
            raise SystemExit(1)
        timestamp = lines[args.line - 1].start_time
    elif args.timestamp:
        timestamp = args.timestamp
    else:
        print("Error: 'seek' requires a timestamp or --line <n>", file=sys.stderr)
        raise SystemExit(1)

    # Unparseable timestamps are a silent no-op, even without ffmpeg or media
    if parse_timecode(timestamp) is None:
        return

    _check_ffmpeg()
    player = AudioPlayer.from_file(_get_media_path(project_dir, args.slug))
    if seek(player, timestamp):
        print(f"Played from {timestamp} ({player.position:.2f}s)")


def cmd_export(args):
    """Write the plain-text dubbing script for one or all formats."""
    project_dir = _get_project_dir(args.slug)
    lines = load_script_lines(project_dir)

    formats = SCRIPT_FORMATS if args.format == "all" else (args.format,)
    for script_format in formats:
        path = export_script(lines, project_dir, args.slug, script_format)
        print(f"Exported: {path}")


def cmd_clips(args):
    """Cut a reference audio clip for every line."""
    _check_ffmpeg()
    project_dir = _get_project_dir(args.slug)
    media = _get_media_path(project_dir, args.slug)
    script_path = os.path.join(project_dir, "script.json")

    if not args.force and clips_fresh(project_dir, [script_path, media]):
        print("[skip] Clips: clips/ is up to date")
        return

    clear_outputs(project_dir, ["clips"])
    lines = load_script_lines(project_dir)
    print(f"Cutting clips for {len(lines)} lines...")
    paths = export_clips(AudioSegment.from_file(media), lines, project_dir)
    print(f"Wrote {len(paths)} clips to {os.path.join(project_dir, 'clips')}")
    skipped = len(lines) - len(paths)
    if skipped:
        print(f"Skipped {skipped} lines with unusable time ranges", file=sys.stderr)


def cmd_status(args):
    """Show project status."""
    slug = args.slug
    project_dir = _get_project_dir(slug)

    script = load_artifact(project_dir, "script.json")
    status = get_project_status(project_dir)

    print(f"Project: {slug}")
    print(f"Source:  {script.get('source', 'unknown')}")
    print(f"Media:   {script.get('media') or 'none'}")

    decode = status["decode"]
    print(f"Lines:   {decode['lines']} ({decode['dialogue']} dialogue, {decode['actions']} action)")

    print("Steps:")
    for step in ("decode", "clips", "export"):
        info = status[step]
        marker = "[done]" if info["state"] == "done" else "[----]"
        details = ""
        if step == "clips" and info["state"] == "done":
            details = f" ({info['files']} files)"
        elif step == "export" and info["state"] == "done":
            details = f" ({', '.join(info['files'])})"
        print(f"  {marker} {step:<8}{details}")


def cmd_list(args):
    """List all projects."""
    projects = list_projects(output_base=OUTPUT_DIR)
    if not projects:
        print("No projects found.")
        return
    print("Projects:")
    for name in projects:
        status = get_project_status(os.path.join(OUTPUT_DIR, name))
        marker = "[done]" if status["export"]["state"] == "done" else "[----]"
        print(f"  {marker} {name} ({status['decode']['lines']} lines)")


def cmd_prompt(args):
    """Print the generation prompt that produces decodable transcripts."""
    print(SCRIPT_PROMPT)


def main():
    """CLI entry point."""
    parser = argparse.ArgumentParser(
        prog="kuraldub",
        description="KuralDub — decode AI dubbing transcripts into reviewable scripts",
    )
    parser.add_argument("--version", action="version", version=f"%(prog)s {VERSION}")
    parser.add_argument("-v", "--verbose", action="store_true", help="Log decoder and playback details")

    subparsers = parser.add_subparsers(dest="command", help="Available commands")

    # new
    new_parser = subparsers.add_parser("new", help="Create a project from a transcript file")
    new_parser.add_argument("file", help="Path to the raw transcript text")
    new_parser.add_argument("--media", help="Video or audio file the transcript describes")
    new_parser.add_argument("--force", action="store_true", help="Replace an existing project's script")
    new_parser.set_defaults(func=cmd_new)

    # show
    show_parser = subparsers.add_parser("show", help="Print the decoded script")
    show_parser.add_argument("slug", help="Project slug (from filename)")
    show_parser.add_argument("--format", choices=SCRIPT_FORMATS, help="Only show one dialogue version")
    show_parser.set_defaults(func=cmd_show)

    # seek
    seek_parser = subparsers.add_parser("seek", help="Play the media from a timestamp")
    seek_parser.add_argument("slug", help="Project slug")
    seek_parser.add_argument("timestamp", nargs="?", help="H:MM:SS, MM:SS or seconds")
    seek_parser.add_argument("--line", type=int, help="Seek to the start of line <n> (1-based)")
    seek_parser.set_defaults(func=cmd_seek)

    # export
    export_parser = subparsers.add_parser("export", help="Write the dubbing script as text")
    export_parser.add_argument("slug", help="Project slug")
    export_parser.add_argument(
        "--format", choices=SCRIPT_FORMATS + ("all",), default=DEFAULT_SCRIPT_FORMAT,
        help="Which dialogue version to export",
    )
    export_parser.set_defaults(func=cmd_export)

    # clips
    clips_parser = subparsers.add_parser("clips", help="Cut a reference clip per line")
    clips_parser.add_argument("slug", help="Project slug")
    clips_parser.add_argument("--force", action="store_true", help="Re-cut even if clips are up to date")
    clips_parser.set_defaults(func=cmd_clips)

    # status
    status_parser = subparsers.add_parser("status", help="Show project status")
    status_parser.add_argument("slug", help="Project slug")
    status_parser.set_defaults(func=cmd_status)

    # list
    list_parser = subparsers.add_parser("list", help="List all projects")
    list_parser.set_defaults(func=cmd_list)

    # prompt
    prompt_parser = subparsers.add_parser("prompt", help="Print the transcript generation prompt")
    prompt_parser.set_defaults(func=cmd_prompt)

    args = parser.parse_args()

    if args.verbose:
        logging.basicConfig(level=logging.DEBUG, format="%(levelname)s %(name)s: %(message)s")

    if not args.command:
        parser.print_help()
        return

    args.func(args)
