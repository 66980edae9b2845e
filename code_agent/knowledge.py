"""
Domain knowledge - detects a file's technology domain and supplies an expert prompt.
"""

import os

from .config import DEFAULT_CONFIG
from .utils import warn

# =============================================================================
# DOMAIN DEFINITIONS
# =============================================================================

DOMAINS = {
    'webgpu': {
        'name': 'WebGPU',
        'extensions': ['.wgsl'],
        'keywords': ['GPUDevice', 'GPUBuffer', 'GPUBindGroup', 'GPURenderPipeline', 'GPUCommandEncoder'],
        'imports': ['@webgpu', 'wgpu'],
        'prompt': """You are a WebGPU graphics engineer expert.

Expertise:
- WGSL shader language
- GPU pipelines (render, compute)
- Bind groups and layouts
- Buffer management
- Texture handling
- GPU synchronization

When debugging WebGPU:
- bindGroupLayout mismatches → Check @binding/@group decorators
- Pipeline errors → Verify vertex attributes match
- Buffer errors → Check size alignments (16-byte for uniform)

Be precise about WGSL syntax and WebGPU API.""",
    },
    'webgl': {
        'name': 'WebGL',
        'extensions': ['.glsl', '.vert', '.frag', '.vs', '.fs'],
        'keywords': ['gl.bindBuffer', 'gl.bindTexture', 'gl.drawArrays', 'gl.drawElements', 'gl.createShader'],
        'imports': ['three', 'babylon', 'gl-matrix'],
        'prompt': """You are a WebGL graphics engineer expert.

Expertise:
- GLSL shader language (vertex, fragment)
- Attribute and uniform handling
- Texture units and samplers
- Framebuffers and renderbuffers
- Blending and depth testing

When debugging WebGL:
- Shader compilation → Check GLSL version and precision
- Texture issues → Verify power-of-2 and binding
- Performance → Batch draw calls, minimize state changes

Be precise about WebGL API and GLSL syntax.""",
    },
    'react': {
        'name': 'React',
        'extensions': ['.tsx', '.jsx'],
        'keywords': ['useState', 'useEffect', 'useContext', 'useReducer', 'useMemo', 'useCallback'],
        'imports': ['react', 'react-dom', 'next'],
        'prompt': """You are a React/Next.js frontend expert.

Expertise:
- React hooks (useState, useEffect, useMemo, useCallback)
- Component patterns (composition, HOC, render props)
- State management (Context, Redux, Zustand)
- Performance optimization (memo, lazy, Suspense)
- Server components (Next.js 13+)

When debugging React:
- Re-render issues → Check dependency arrays
- State bugs → Verify immutable updates
- Hook errors → Ensure rules of hooks

Follow React best practices and modern patterns.""",
    },
    'vue': {
        'name': 'Vue',
        'extensions': ['.vue'],
        'keywords': ['ref', 'reactive', 'computed', 'watch', 'onMounted', 'defineComponent'],
        'imports': ['vue', 'nuxt', 'pinia'],
        'prompt': """You are a Vue.js frontend expert.

Expertise:
- Composition API (ref, reactive, computed)
- Options API (data, methods, computed)
- Vue Router and navigation guards
- Pinia/Vuex state management
- Nuxt.js framework

When debugging Vue:
- Reactivity issues → Check ref vs reactive
- Template errors → Verify v-bind, v-model syntax
- Lifecycle → Ensure proper hook usage

Follow Vue 3 best practices.""",
    },
    'angular': {
        'name': 'Angular',
        'extensions': ['.component.ts', '.service.ts', '.module.ts'],
        'keywords': ['@Component', '@Injectable', '@NgModule', 'Observable', 'BehaviorSubject'],
        'imports': ['@angular/core', '@angular/common', 'rxjs'],
        'prompt': """You are an Angular frontend expert.

Expertise:
- Components and decorators
- Services and dependency injection
- RxJS observables and operators
- Angular Router
- Forms (reactive, template-driven)

When debugging Angular:
- DI errors → Check providers array
- Template errors → Verify ngIf, ngFor syntax
- Observable leaks → Ensure unsubscribe

Follow Angular style guide.""",
    },
    'tailwind': {
        'name': 'Tailwind CSS',
        'extensions': ['tailwind.config.js', 'tailwind.config.ts'],
        'keywords': ['className', 'bg-', 'text-', 'flex', 'grid', 'hover:', 'dark:'],
        'imports': ['tailwindcss', 'postcss'],
        'prompt': """You are a Tailwind CSS expert.

Expertise:
- Utility-first CSS patterns
- Responsive design (sm:, md:, lg:)
- Dark mode (dark:)
- Custom configuration
- JIT mode and arbitrary values
- Component patterns with Tailwind

Prefer Tailwind utilities over custom CSS.
Suggest clean, maintainable class combinations.""",
    },
    'typescript': {
        'name': 'TypeScript',
        'extensions': ['.ts'],
        'keywords': ['interface', 'type', 'generic', 'extends', 'implements'],
        'imports': [],
        'prompt': """You are a TypeScript expert.

Expertise:
- Type system (generics, utility types)
- Interfaces vs types
- Strict mode best practices
- Module patterns
- Node.js with TypeScript

Provide type-safe solutions.
Avoid 'any' type unless necessary.""",
    },
    'generic': {
        'name': 'Generic',
        'extensions': [],
        'keywords': [],
        'imports': [],
        'prompt': """You are a senior full-stack and graphics engineer.

Your role:
- Help understand existing code deeply
- Debug issues by finding root cause
- Design and add features step by step

Rules:
1. Explain before coding
2. Ask clarifying questions if unclear
3. Prefer simple, maintainable solutions
4. Use only given code context""",
    },
}

def get_domain(domain_type):
    """Get a domain definition, falling back to generic."""
    return DOMAINS.get(domain_type, DOMAINS['generic'])

def get_all_domain_types():
    return list(DOMAINS)

def create_detection(domain, confidence, reason):
    return {'domain': domain, 'confidence': confidence, 'reason': reason}

# =============================================================================
# DETECTION
# =============================================================================

def detect_from_file(file_path, content=None):
    """
    Detect the domain of a single file.

    Extension match first, then filename suffix (e.g. `.component.ts`),
    then the content, then a TypeScript default for `.ts` files.
    """
    ext = os.path.splitext(file_path)[1].lower()
    file_name = os.path.basename(file_path).lower()

    for domain_type, domain in DOMAINS.items():
        if ext in domain['extensions']:
            return create_detection(domain_type, 0.9, f"File extension {ext} matches {domain['name']}")

        # '.component.ts' -> 'component.ts'
        if any(file_name.endswith(e.replace('.', '', 1)) for e in domain['extensions']):
            return create_detection(domain_type, 0.8, f"Filename pattern matches {domain['name']}")

    if content:
        return detect_from_content(content, file_path)

    if ext == '.ts':
        return create_detection('typescript', 0.5, 'TypeScript file (no specific domain detected)')

    return create_detection('generic', 0.3, 'No specific domain detected')

def detect_from_content(content, file_path=None):
    """Score every domain by keyword (+2) and import (+3) hits; highest wins."""
    scores = {domain_type: 0 for domain_type in DOMAINS}

    for domain_type, domain in DOMAINS.items():
        for keyword in domain['keywords']:
            if keyword in content:
                scores[domain_type] += 2

        for imp in domain['imports']:
            if f"from '{imp}" in content or f'from "{imp}' in content or f"require('{imp}" in content:
                scores[domain_type] += 3

    max_score = 0
    detected = 'generic'
    for domain_type, score in scores.items():
        if score > max_score:
            max_score = score
            detected = domain_type

    if max_score == 0:
        return create_detection('generic', 0.3, 'No domain-specific patterns found')

    return create_detection(
        detected,
        min(max_score / 10, 1),
        f"Found {max_score} matches for {DOMAINS[detected]['name']}"
    )

def detect_from_project(files):
    """Detect the dominant domain over many files (objects with path and content)."""
    domain_counts = {domain_type: 0.0 for domain_type in DOMAINS}

    for f in files:
        result = detect_from_file(f.path, f.content)
        if result['confidence'] > 0.5:
            domain_counts[result['domain']] += result['confidence']

    max_count = 0
    dominant = 'generic'
    for domain_type, count in domain_counts.items():
        if count > max_count:
            max_count = count
            dominant = domain_type

    confidence = min(max_count / len(files), 1) if files else 0
    return create_detection(dominant, confidence, f"Project primarily uses {DOMAINS[dominant]['name']}")

# =============================================================================
# KNOWLEDGE DOCUMENTS
# =============================================================================

def load_knowledge(domain_type, knowledge_dir=None):
    """Load the markdown knowledge document for a domain, or None."""
    knowledge_dir = knowledge_dir or DEFAULT_CONFIG["knowledge_dir"]
    file_path = os.path.join(knowledge_dir, f"{domain_type}.md")

    if not os.path.isfile(file_path):
        return None

    try:
        with open(file_path, "r", encoding="utf-8") as f:
            content = f.read()
    except (OSError, UnicodeDecodeError):
        warn(f"Knowledge doc not readable: {domain_type}.md")
        return None

    return {
        'domain': domain_type,
        'title': get_domain(domain_type)['name'],
        'content': content
    }

def search_knowledge(domain_type, query, knowledge_dir=None):
    """Return up to 3 markdown sections mentioning the query, joined by rules."""
    doc = load_knowledge(domain_type, knowledge_dir)
    if not doc:
        return ""

    query_lower = query.lower()
    relevant_sections = []
    current_section = ""
    is_relevant = False

    for line in doc['content'].split("\n"):
        if line.startswith("#"):
            if is_relevant and current_section:
                relevant_sections.append(current_section.strip())
            current_section = line + "\n"
            is_relevant = query_lower in line.lower()
        else:
            current_section += line + "\n"
            if query_lower in line.lower():
                is_relevant = True

    if is_relevant and current_section:
        relevant_sections.append(current_section.strip())

    return "\n\n---\n\n".join(relevant_sections[:3])

def get_enhanced_prompt(domain_type, context=None, knowledge_dir=None):
    """Domain prompt plus any knowledge sections matching the context."""
    prompt = get_domain(domain_type)['prompt']

    if context:
        knowledge = search_knowledge(domain_type, context, knowledge_dir)
        if knowledge:
            prompt += f"\n\nRelevant Knowledge:\n{knowledge}"

    return prompt

def list_knowledge_docs(knowledge_dir=None):
    """Domains that have a knowledge document on disk."""
    knowledge_dir = knowledge_dir or DEFAULT_CONFIG["knowledge_dir"]
    if not os.path.isdir(knowledge_dir):
        return []
    return sorted(
        os.path.splitext(name)[0]
        for name in os.listdir(knowledge_dir)
        if name.endswith(".md")
    )
