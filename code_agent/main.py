"""
Main application entry point and CLI handling.
"""

import argparse
import os
import sys

from .config import BOLD, RESET, GREY, GREEN, RED, load_config, load_environment
from .bug_analysis import run_agent_loop, run_agent_with_input
from .dependency_analysis import build_dependency_map, print_dependency_map, DependencyGraph
from .file_selector import NoFilesFoundError
from .interactive import run_chat_mode
from .llm_client import ModelQueryError, create_client
from .modes import debug, concept, feature
from .project_analysis import analyze_project
from .repo_scanner import scan_repository, print_scanned_files
from .report_generators import (
    print_debug_result, print_concept_result, print_feature_result,
    print_bug_analysis, print_fix_suggestions, print_project_analysis,
    generate_html_report, format_json
)

MODES = ['chat', 'debug', 'concept', 'feature', 'analyze', 'project', 'scan', 'deps', 'serve']
MODEL_MODES = {'chat', 'debug', 'concept', 'feature', 'analyze', 'project'}

# =============================================================================
# ARGUMENTS
# =============================================================================

def build_parser():
    parser = argparse.ArgumentParser(
        prog="code-agent",
        description="Local Code Agent - debug, explain and plan code with a local model",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  code-agent --mode chat --path ./project                      # Interactive chat
  code-agent --mode debug --error "TypeError: x is undefined"  # Diagnose an error
  code-agent --mode concept --path ./project                   # Explain the codebase
  code-agent --mode feature --request "add dark mode"          # Plan a feature
  code-agent --mode analyze --error "login crashes"            # Bug analysis agent loop
  code-agent --mode project --path ./project --html-report     # Issue scan of a project
  code-agent --mode scan --path ./project                      # List code files
  code-agent --mode deps --path ./project                      # Show the import graph
  code-agent --mode serve --port 3000                          # Start the web API"""
    )
    parser.add_argument('--mode', choices=MODES, default='chat',
                        help='What the agent should do (default: chat)')
    parser.add_argument('--error', default=None,
                        help='Error message or bug description (debug, analyze)')
    parser.add_argument('--path', default=None,
                        help='Project directory (defaults to current directory)')
    parser.add_argument('--request', default=None,
                        help='Feature request (feature)')
    parser.add_argument('--files', nargs='+', default=None,
                        help='Files to look at instead of auto-detecting (debug, analyze)')
    parser.add_argument('--json', action='store_true',
                        help='Output results in JSON format')
    parser.add_argument('--html-report', action='store_true',
                        help='Generate an HTML report (project)')
    parser.add_argument('--port', type=int, default=3000,
                        help='Port for the web API (serve)')
    return parser

# =============================================================================
# MODE RUNNERS
# =============================================================================

def _emit(result, as_json, printer):
    if as_json:
        print(format_json(result))
    else:
        printer(result)

def run_scan(args, config):
    files = scan_repository(args.path, config=config, verbose=not args.json)
    if args.json:
        print(format_json(files))
    else:
        print_scanned_files(files)
    return files

def run_deps(args, config):
    files = scan_repository(args.path, config=config, verbose=False)
    dependency_map = build_dependency_map(files, verbose=not args.json)
    cycles = DependencyGraph.from_dependency_map(dependency_map).find_circular_dependencies()

    if args.json:
        print(format_json({'dependencies': dependency_map, 'cycles': cycles}))
        return dependency_map

    print_dependency_map(dependency_map)
    if cycles:
        print(f"\n{RED}🔄 Circular dependencies:{RESET}")
        for cycle in cycles:
            print(f"   {' → '.join(cycle)}")
    return dependency_map

def ensure_model_available(client):
    """Exit with a hint when the model backend is not reachable."""
    print(f"{GREY}🔌 Checking {client.name} connection...{RESET}")
    if not client.health_check():
        print(f"{RED}✖ {client.name} is not running!{RESET}")
        print(f"{GREY}   Start it with: ollama serve{RESET}")
        sys.exit(1)
    print(f"{GREEN}   ✅ {client.name} connected!{RESET}")

def run_model_mode(args, config, client):
    if args.mode == 'chat':
        run_chat_mode(client, args.path, config=config)

    elif args.mode == 'debug':
        if not args.error:
            raise ValueError('--error is required for debug mode')
        result = debug(client, args.error, base_path=args.path, file_paths=args.files, config=config)
        _emit(result, args.json, print_debug_result)

    elif args.mode == 'concept':
        _emit(concept(client, args.path, config=config), args.json, print_concept_result)

    elif args.mode == 'feature':
        if not args.request:
            raise ValueError('--request is required for feature mode')
        _emit(feature(client, args.request, args.path, config=config), args.json, print_feature_result)

    elif args.mode == 'analyze':
        if args.error:
            result = run_agent_with_input(client, args.error, file_paths=args.files, base_path=args.path, config=config)
        else:
            result = run_agent_loop(client, config=config)
        if args.json:
            print(format_json(result))
        else:
            print_bug_analysis(result['analysis'])
            print_fix_suggestions(result['fixes'])

    elif args.mode == 'project':
        result = analyze_project(client, args.path, config=config)
        _emit(result, args.json, print_project_analysis)
        if args.html_report:
            generate_html_report(result)

# =============================================================================
# MAIN ENTRY POINT
# =============================================================================

def main(argv=None, client=None):
    """Main entry point for the Local Code Agent."""
    args = build_parser().parse_args(argv)
    args.path = os.path.abspath(args.path or os.getcwd())

    config = load_environment(load_config())

    try:
        if args.mode == 'scan':
            run_scan(args, config)
            return 0
        if args.mode == 'deps':
            run_deps(args, config)
            return 0

        client = client or create_client(config)

        if args.mode == 'serve':
            from .web_server import serve
            serve(client, config, port=args.port)
            return 0

        print(f"\n{BOLD}🤖 Local Code Agent{RESET} {GREY}({args.mode} mode){RESET}")
        # The bug analysis loop runs its own connection check
        if args.mode != 'analyze':
            ensure_model_available(client)
        run_model_mode(args, config, client)

    except (NoFilesFoundError, ModelQueryError, ValueError) as e:
        print(f"{RED}✖ Error: {e}{RESET}")
        sys.exit(1)

    return 0

if __name__ == "__main__":
    main()
