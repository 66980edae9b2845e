"""
Interactive chat mode - a continuous conversation about the loaded project.
"""

import os

from .config import BOLD, RESET, GREY, RED, GREEN, YELLOW, DOUBLE_RULE
from .llm_client import ModelQueryError
from .session import AgentSession

HELP_TEXT = f"""
{BOLD}📖 Available Commands:{RESET}
──────────────────────────────
/debug <error>     - Analyze an error
/concept           - Explain the codebase
/feature <request> - Plan a new feature
/files             - List loaded files
/reload            - Reload project files
/exit              - Exit chat mode

Or just type any question to chat with AI!
"""

FILES_SHOWN = 10

# =============================================================================
# COMMANDS
# =============================================================================

def _print_reply(reply):
    print(f"\n{GREEN}🤖 AI:{RESET} {reply}")

def list_loaded_files(session):
    print(f"\n{BOLD}📁 Loaded Files ({len(session.files)}):{RESET}")
    for f in session.files[:FILES_SHOWN]:
        print(f"   • {f.name}")
    if len(session.files) > FILES_SHOWN:
        print(f"{GREY}   ... and {len(session.files) - FILES_SHOWN} more{RESET}")

def handle_command(session, command):
    """
    Run one slash command.

    Returns:
        bool: False when the chat should end.
    """
    cmd, _, args = command.partition(' ')
    args = args.strip()

    if cmd == '/help':
        print(HELP_TEXT)
    elif cmd == '/debug':
        error = args or 'general error'
        print(f'\n🐛 Debugging: "{error}"')
        print(f"{GREY}🤔 Analyzing...{RESET}")
        _print_reply(session.chat_debug(error))
    elif cmd == '/concept':
        print("\n📚 Explaining codebase...")
        print(f"{GREY}🤔 Analyzing architecture...{RESET}")
        _print_reply(session.chat_concept())
    elif cmd == '/feature':
        request = args or 'new feature'
        print(f'\n✨ Planning: "{request}"')
        print(f"{GREY}🤔 Thinking...{RESET}")
        _print_reply(session.chat_feature(request))
    elif cmd == '/files':
        list_loaded_files(session)
    elif cmd == '/reload':
        session.load_project(verbose=False)
        print(f"{GREEN}   ✅ Reloaded {len(session.files)} files{RESET}")
    elif cmd in ('/exit', '/quit'):
        print("\n👋 Goodbye!")
        return False
    else:
        print(f"{YELLOW}❓ Unknown command: {cmd}. Type /help for help.{RESET}")

    return True

def handle_input(session, text):
    """Dispatch one line of user input. Returns False when the chat should end."""
    text = text.strip()
    if not text:
        return True

    try:
        if text.startswith('/'):
            return handle_command(session, text)

        print(f"\n{GREY}🤔 Thinking...{RESET}")
        _print_reply(session.chat(text))
    except ModelQueryError as e:
        print(f"{RED}❌ Error: {e}{RESET}")

    return True

# =============================================================================
# CHAT LOOP
# =============================================================================

def run_chat_mode(client, project_path=None, config=None, input_func=input):
    """Load the project and chat until /exit, EOF or Ctrl-C."""
    print(f"\n{BOLD}💬 Chat Mode - Interactive AI Assistant{RESET}")
    print(DOUBLE_RULE)
    print("Commands: /debug, /concept, /feature, /files, /help, /exit")
    print("Or just type your question!")
    print(DOUBLE_RULE)

    session = AgentSession(client, project_path=project_path or os.getcwd(), config=config)
    print(f"\n📂 Loading project: {session.project_path}")
    session.load_project(verbose=False)
    if session.files:
        print(f"{GREEN}   ✅ Loaded {len(session.files)} files{RESET}")
    else:
        print(f"{YELLOW}   ⚠️ No files loaded{RESET}")

    while True:
        try:
            text = input_func(f"\n{BOLD}🤖 You:{RESET} ")
        except (KeyboardInterrupt, EOFError):
            print(f"\n{GREY}👋 Goodbye!{RESET}")
            break

        if not handle_input(session, text):
            break

    return session
