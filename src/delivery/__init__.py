"""
Presentation layer for generated questions.

Components:
- PhraseTable: locale lookup for prompts, labels and step templates
- render_text / render_html: turn ExplanationStep records into display text

Import from the submodules directly (src.delivery.phrases,
src.delivery.renderer); the generators depend on phrases, so this
package keeps no eager imports.
"""
