"""
Question generation for subnetting and number-base practice.

Modules:
- models: Question, AnswerField, BinaryQuestion, ExplanationStep and enums
- sampling: bounded rejection sampling of public addresses
- binary_generator: binary / hex / decimal conversions
- subnet_generator: basic, VLSM, wildcard, network calculation and IPv6

Usage:
    from src.generation.subnet_generator import generate_subnetting_question

    question = generate_subnetting_question("vlsm", "medium", locale="en")
    for answer_field in question.answer_fields:
        print(answer_field.label, answer_field.answer)
"""
