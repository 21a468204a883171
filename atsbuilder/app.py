import argparse
import json
import sys
from dataclasses import asdict
from pathlib import Path

from . import __version__
from .config import MATCH_MODES, Settings
from .content_selection import select_relevant_content
from .env import load_env
from .errors import AtsBuilderError, InvalidArgumentError
from .job_analysis import basic_analysis, match_profile_to_job
from .logger import get_logger
from .models import CandidateProfile, JobAnalysis
from .postings import fetch_job_description, html_to_text
from .schema import (
    validate_job_analysis,
    validate_job_analysis_strict,
    validate_profile,
    validate_profile_strict,
)
from .scoring import calculate_ats_score
from .storage import list_scores, load_snapshot, prune_scores, save_score


def _load_inputs(args: argparse.Namespace):
    profile = CandidateProfile.from_dict(load_snapshot(Path(args.profile)))
    job = JobAnalysis.from_dict(load_snapshot(Path(args.job)))
    return profile, job


def _print_json(data) -> None:
    print(json.dumps(data, indent=2, default=str))


def cmd_score(args: argparse.Namespace) -> None:
    settings: Settings = args.settings
    profile, job = _load_inputs(args)
    result = calculate_ats_score(profile, job, match_mode=args.match_mode or settings.keyword_match_mode)

    if args.save:
        record_id = save_score(Path(args.db or settings.db_path), job, result)
        if not args.json:
            print(f"Saved as record #{record_id}")

    if args.json:
        _print_json(result.to_dict())
        return

    b = result.breakdown
    print(f"ATS score for {job.position or 'position'} at {job.company or 'company'}: {result.overall}/100\n")
    print(f"  Keyword Match:        {b.keyword_match}/100 (40% weight)")
    print(f"  Experience Relevance: {b.experience_relevance}/100 (30% weight)")
    print(f"  Format Parseability:  {b.format_parseability}/100 (20% weight)")
    print(f"  Education Match:      {b.education_match}/100 (10% weight)")
    print(f"\nMissing Keywords: {', '.join(result.missing_keywords) or 'None'}")
    print("\nSuggestions:")
    for i, suggestion in enumerate(result.suggestions, 1):
        print(f"  {i}. {suggestion}")


def cmd_select(args: argparse.Namespace) -> None:
    profile, job = _load_inputs(args)
    selected = select_relevant_content(profile, job)

    if args.json:
        _print_json(asdict(selected))
        return

    print(f"Selected Work Experiences: {len(selected.experience)}")
    for i, exp in enumerate(selected.experience, 1):
        print(f"  {i}. {exp.position} at {exp.company} (relevance {exp.relevance_score:g})")
    print(f"\nSelected Skills: {len(selected.skills)}")
    for i, skill in enumerate(selected.skills, 1):
        print(f"  {i}. {skill.name} (relevance {skill.relevance_score:g})")
    print(f"\nSelected Projects: {len(selected.projects)}")
    for i, project in enumerate(selected.projects, 1):
        print(f"  {i}. {project.title} (relevance {project.relevance_score:g})")
    print(f"\nEducation: {len(selected.education)}")


def cmd_analyze(args: argparse.Namespace) -> None:
    settings: Settings = args.settings
    if args.url:
        text = fetch_job_description(args.url, timeout=settings.fetch_timeout, retries=settings.fetch_retries)
    else:
        input_path = Path(args.input)
        if not input_path.exists():
            raise InvalidArgumentError(f"Input file not found: {input_path}")
        text = input_path.read_text(encoding="utf-8")
        if input_path.suffix.lower() in (".html", ".htm"):
            text = html_to_text(text)

    analysis = basic_analysis(text, company=args.company or "", position=args.position or "")
    data = analysis.to_dict()
    if args.output:
        out = Path(args.output)
        out.parent.mkdir(parents=True, exist_ok=True)
        out.write_text(json.dumps(data, indent=2), encoding="utf-8")
        print(f"Wrote job analysis to {out}")
        return
    _print_json(data)


def cmd_match(args: argparse.Namespace) -> None:
    profile, job = _load_inputs(args)
    match = match_profile_to_job(profile, job)

    if args.json:
        _print_json(asdict(match))
        return

    print(f"Overall match: {match.overall_score}/100")
    print(f"  Skills:     {match.skill_match.percentage}% "
          f"(missing: {', '.join(match.skill_match.missing_skills) or 'none'})")
    print(f"  Experience: {match.experience_relevance.score}/100")
    print(f"  Education:  {match.education_match.score}/100")
    for rec in match.recommendations:
        print(f" - {rec}")


def cmd_validate(args: argparse.Namespace) -> None:
    if args.profile:
        data = load_snapshot(Path(args.profile))
        errors = validate_profile_strict(data)[1] if args.strict else validate_profile(data)
    else:
        data = load_snapshot(Path(args.job))
        errors = validate_job_analysis_strict(data)[1] if args.strict else validate_job_analysis(data)

    if errors:
        print("Invalid:")
        for e in errors:
            print(f" - {e}")
        raise SystemExit(2)
    print("Valid")


def cmd_history(args: argparse.Namespace) -> None:
    settings: Settings = args.settings
    records = list_scores(Path(args.db or settings.db_path), company=args.company, limit=args.limit)
    if not records:
        print("No scores recorded.")
        return
    for r in records:
        print(f"#{r.id} {r.created_at:%Y-%m-%d %H:%M} | {r.company} - {r.position} | overall {r.overall}")
        print(f"    keywords {r.keyword_match}, experience {r.experience_relevance}, "
              f"format {r.format_parseability}, education {r.education_match}")


def cmd_prune(args: argparse.Namespace) -> None:
    settings: Settings = args.settings
    before, after = prune_scores(Path(args.db or settings.db_path), days=args.days)
    print(f"Done. removed={before - after} remaining={after}")


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(prog="atsbuilder", description="ATS resume builder: scoring and tailoring CLI")
    parser.add_argument("--version", action="store_true", help="Show version")

    subparsers = parser.add_subparsers(dest="command")

    sc = subparsers.add_parser("score", help="Calculate the ATS score of a profile for a job analysis")
    sc.add_argument("--profile", required=True, help="Path to candidate profile JSON")
    sc.add_argument("--job", required=True, help="Path to job analysis JSON")
    sc.add_argument("--match-mode", choices=MATCH_MODES, help="Keyword matching mode (default: ATS_KEYWORD_MATCH_MODE or substring)")
    sc.add_argument("--save", action="store_true", help="Store the result in the score history database")
    sc.add_argument("--db", help="Path to score history database (default: ATS_DB_PATH)")
    sc.add_argument("--json", action="store_true", help="Print the result as JSON")
    sc.set_defaults(func=cmd_score)

    sel = subparsers.add_parser("select", help="Select the profile content most relevant to a job")
    sel.add_argument("--profile", required=True, help="Path to candidate profile JSON")
    sel.add_argument("--job", required=True, help="Path to job analysis JSON")
    sel.add_argument("--json", action="store_true", help="Print the selection as JSON")
    sel.set_defaults(func=cmd_select)

    an = subparsers.add_parser("analyze", help="Extract a job analysis from a job description")
    src = an.add_mutually_exclusive_group(required=True)
    src.add_argument("--input", help="Path to job description text or HTML file")
    src.add_argument("--url", help="Job posting URL to fetch")
    an.add_argument("--company", help="Company name")
    an.add_argument("--position", help="Position title")
    an.add_argument("--output", help="Write the analysis JSON to this path instead of stdout")
    an.set_defaults(func=cmd_analyze)

    mt = subparsers.add_parser("match", help="Quick profile-to-job fit estimate")
    mt.add_argument("--profile", required=True, help="Path to candidate profile JSON")
    mt.add_argument("--job", required=True, help="Path to job analysis JSON")
    mt.add_argument("--json", action="store_true", help="Print the result as JSON")
    mt.set_defaults(func=cmd_match)

    val = subparsers.add_parser("validate", help="Validate a profile or job analysis JSON")
    target = val.add_mutually_exclusive_group(required=True)
    target.add_argument("--profile", help="Path to candidate profile JSON")
    target.add_argument("--job", help="Path to job analysis JSON")
    val.add_argument("--strict", action="store_true", help="Also check dates, levels and enumerations")
    val.set_defaults(func=cmd_validate)

    hist = subparsers.add_parser("history", help="List stored ATS scores")
    hist.add_argument("--db", help="Path to score history database (default: ATS_DB_PATH)")
    hist.add_argument("--company", help="Only show scores for this company")
    hist.add_argument("--limit", type=int, default=20, help="Maximum records to show (default: 20)")
    hist.set_defaults(func=cmd_history)

    pr = subparsers.add_parser("prune", help="Delete stored scores older than N days")
    pr.add_argument("--db", help="Path to score history database (default: ATS_DB_PATH)")
    pr.add_argument("--days", type=int, default=90, help="Keep scores newer than this many days (default: 90)")
    pr.set_defaults(func=cmd_prune)

    return parser


def main(argv=None):
    # Load .env if present (ATS_LOG_LEVEL, ATS_DB_PATH, ...)
    load_env()
    settings = Settings.from_env()
    logger = get_logger(level=settings.log_level, log_dir=settings.log_dir)
    for var, value in settings.ignored:
        logger.warning("Ignoring invalid setting", variable=var, value=value)

    parser = build_parser()
    args = parser.parse_args(argv)

    if args.version:
        print(__version__)
        return

    if not hasattr(args, "func"):
        parser.print_help()
        return

    args.settings = settings
    try:
        args.func(args)
    except AtsBuilderError as e:
        logger.error(f"{args.command} failed", error=str(e))
        print(f"Error: {e}", file=sys.stderr)
        raise SystemExit(2)


if __name__ == "__main__":
    main()
