
import argparse, asyncio, json, logging, pathlib, sys

from scholarscan.config import Config
from scholarscan.llm.base import LLMClient
from scholarscan.llm.config import load_model_name
from scholarscan.render import render_markdown, USAGE_TIPS_TEXT
from scholarscan.schemas import AVAILABLE_CRITERIA, ReviewCategory, CritiqueLevel
from scholarscan.session import ReviewSession, ReviewStatus

CATEGORY_CHOICES = {
    "undergraduate": ReviewCategory.UNDERGRADUATE,
    "journal": ReviewCategory.JOURNAL,
}


def parse_custom(values):
    """'Name' or 'Name: focus keywords' -> (name, keywords)"""
    parsed = []
    for raw in values or []:
        name, _, keywords = raw.partition(":")
        parsed.append((name.strip(), keywords.strip()))
    return parsed


def build_session(args, llm, cfg):
    session = ReviewSession(llm=llm, config=cfg)
    session.set_category(CATEGORY_CHOICES[args.category])
    session.set_critique_level(CritiqueLevel(args.level.capitalize()))

    if args.all_criteria:
        session.toggle_select_all()
    else:
        for criterion in dict.fromkeys(args.criteria or []):
            session.toggle_criterion(criterion)

    custom = parse_custom(args.custom)
    while len(session.configuration.custom_criteria) < len(custom):
        session.add_custom_criterion()
    for entry, (name, keywords) in zip(session.configuration.custom_criteria, custom):
        session.edit_custom_criterion(entry.id, "name", name)
        if not session.edit_custom_criterion(entry.id, "keywords", keywords):
            print(f"Warning: focus keywords for '{name}' exceed {cfg.max_keyword_words} words and were dropped")

    if args.text_file:
        session.set_text(pathlib.Path(args.text_file).read_text(encoding="utf-8"))
    return session


async def run(args) -> int:
    cfg = Config()
    llm = LLMClient(model_name=args.model)
    session = build_session(args, llm, cfg)

    if args.file:
        print(f"Reading {args.file}...")
        if not await session.attach_file(args.file):
            print(f"Error: {session.error}")
            return 2

    print(f"Running review with {args.model}...")
    status = await session.submit()
    if status != ReviewStatus.SUCCEEDED:
        print(f"Error: {session.error}")
        return 1

    print(render_markdown(session.feedback))
    if args.output:
        outpath = pathlib.Path(args.output)
        outpath.parent.mkdir(parents=True, exist_ok=True)
        with open(outpath, "w", encoding="utf-8") as f:
            json.dump(session.feedback.to_contract(), f, indent=2, ensure_ascii=False)
        print(f"Saved to {outpath}")
    return 0


def main(argv=None):
    ap = argparse.ArgumentParser(description="Structured academic review of a document.",
                                 epilog=USAGE_TIPS_TEXT)
    ap.add_argument("--file", type=str, help="PDF or DOCX document to review (max 4MB).")
    ap.add_argument("--text_file", type=str, help="Plain text file whose contents are reviewed as pasted text.")
    ap.add_argument("--category", choices=sorted(CATEGORY_CHOICES), default="undergraduate")
    ap.add_argument("--level", choices=["supportive", "standard", "ruthless"], default="standard",
                    help="Critique intensity (default: standard).")
    ap.add_argument("--criteria", nargs="*", choices=AVAILABLE_CRITERIA, metavar="CRITERION",
                    help=f"Built-in criteria: {', '.join(AVAILABLE_CRITERIA)}")
    ap.add_argument("--all_criteria", action="store_true", help="Select every built-in criterion.")
    ap.add_argument("--custom", action="append", metavar="'NAME: KEYWORDS'",
                    help="Custom criterion, optionally with focus keywords. Repeatable.")
    ap.add_argument("--model", type=str, default=load_model_name())
    ap.add_argument("--output", type=str, help="Write the raw review JSON here.")
    ap.add_argument("--log_level", type=str, default="WARNING")
    args = ap.parse_args(argv)

    logging.basicConfig(level=getattr(logging, args.log_level.upper(), logging.WARNING),
                        format='%(asctime)s - %(levelname)s - %(message)s')
    return asyncio.run(run(args))


if __name__ == "__main__":
    sys.exit(main())
