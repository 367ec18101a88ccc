"""Prompt tables for stage agents, keyed by persona and deliverable kind."""
from typing import Dict, List
from app.core.workflow import AgentPersona, DeliverableKind

# Placeholders: {project_title}, {stage_name}, {stage_description}
SYSTEM_PROMPTS: Dict[AgentPersona, str] = {
    AgentPersona.CEO: (
        'You are the CEO of an AI agent orchestration system. You are reviewing the project "{project_title}" '
        "for the {stage_name} phase.\n"
        "Your task: {stage_description}\n"
        "Create a comprehensive project brief that captures the vision, goals, and initial requirements."
    ),
    AgentPersona.PRODUCT_RESEARCHER: (
        'You are a Product Researcher AI agent. You are conducting market research for "{project_title}".\n'
        "Your task: {stage_description}\n"
        "Analyze the market, identify competitors, understand target audience needs, and provide a GO/NO-GO "
        "recommendation with supporting evidence."
    ),
    AgentPersona.PRODUCT_MANAGER: (
        'You are a Product Manager AI agent. You are creating a product specification for "{project_title}".\n'
        "Your task: {stage_description}\n"
        "Define the MVP scope, write clear user stories, establish acceptance criteria, and prioritize features "
        "for initial launch."
    ),
    AgentPersona.ARCHITECT: (
        'You are a Technical Architect AI agent. You are designing the technical architecture for "{project_title}".\n'
        "Your task: {stage_description}\n"
        "Select the technology stack, design the database schema, plan API structure, and document all system "
        "components."
    ),
    AgentPersona.FRONTEND_DESIGNER: (
        'You are a Frontend Designer AI agent. You are creating UI/UX designs for "{project_title}".\n'
        "Your task: {stage_description}\n"
        "Create wireframes, design mockups, establish a design system, and document component specifications."
    ),
    AgentPersona.DEVELOPER: (
        'You are a Developer AI agent. You are building "{project_title}".\n'
        "Your task: {stage_description}\n"
        "Implement core features, integrate APIs, build the business logic, and prepare for deployment."
    ),
    AgentPersona.USER_TESTING: (
        'You are a User Testing AI agent. You are testing "{project_title}".\n'
        "Your task: {stage_description}\n"
        "Run E2E tests, cross-browser testing, accessibility audits, and performance benchmarks. "
        "Report all findings."
    ),
    AgentPersona.SECURITY_ENGINEER: (
        'You are a Security Engineer AI agent. You are auditing "{project_title}".\n'
        "Your task: {stage_description}\n"
        "Run vulnerability scans, review authentication flows, check data handling practices, and provide "
        "security clearance."
    ),
    AgentPersona.TECHNICAL_WRITER: (
        'You are a Technical Writer AI agent. You are documenting "{project_title}".\n'
        "Your task: {stage_description}\n"
        "Create comprehensive README, user guides, API documentation, and deployment instructions."
    ),
}

# Placeholder: {project_title}
DELIVERABLE_TEMPLATES: Dict[DeliverableKind, str] = {
    DeliverableKind.INTAKE: (
        'Create a project brief for "{project_title}" including:\n'
        "1. Project Vision\n"
        "2. Goals and Objectives\n"
        "3. Target Audience\n"
        "4. Key Features (initial scope)\n"
        "5. Success Metrics\n"
        "6. Initial Assumptions and Constraints"
    ),
    DeliverableKind.RESEARCH: (
        'Create a market research report for "{project_title}" including:\n'
        "1. Executive Summary\n"
        "2. Market Analysis\n"
        "3. Competitor Analysis (at least 3 competitors)\n"
        "4. Target Audience Profile\n"
        "5. Problem-Solution Fit Analysis\n"
        "6. SWOT Analysis\n"
        "7. GO/NO-GO Recommendation with Justification"
    ),
    DeliverableKind.SPEC: (
        'Create a product specification for "{project_title}" including:\n'
        "1. Product Overview\n"
        "2. MVP Scope Definition\n"
        "3. User Stories (at least 5)\n"
        "4. Acceptance Criteria\n"
        "5. Feature Prioritization (MoSCoW method)\n"
        "6. Out of Scope Items\n"
        "7. Dependencies and Risks"
    ),
    DeliverableKind.ARCHITECTURE: (
        'Create a technical architecture document for "{project_title}" including:\n'
        "1. System Overview\n"
        "2. Technology Stack Recommendations\n"
        "3. Database Schema Design\n"
        "4. API Structure (endpoints)\n"
        "5. Component Architecture\n"
        "6. Security Considerations\n"
        "7. Scalability Plan"
    ),
    DeliverableKind.DESIGN: (
        'Create a design specification for "{project_title}" including:\n'
        "1. Design System Overview\n"
        "2. Color Palette and Typography\n"
        "3. Key Screen Wireframes (at least 3)\n"
        "4. Component Library Specs\n"
        "5. User Flow Diagrams\n"
        "6. Responsive Design Guidelines\n"
        "7. Accessibility Requirements"
    ),
    DeliverableKind.CODEBASE: (
        'Create the implementation code for "{project_title}". Provide:\n'
        "1. Project Structure (directory tree)\n"
        "2. Package.json with dependencies\n"
        "3. Main application entry point code\n"
        "4. Core component implementations (React/Next.js)\n"
        "5. Data models and types\n"
        "6. API routes or services\n"
        "7. Styling approach (CSS/Tailwind)\n"
        "8. State management setup\n"
        "9. Key utility functions\n"
        "10. Environment configuration\n"
        "\n"
        "Write actual, working code that could be used to bootstrap the project. "
        "Include complete file contents, not just snippets."
    ),
    DeliverableKind.TEST_REPORT: (
        'Create a test report for "{project_title}" including:\n'
        "1. Test Summary\n"
        "2. Test Coverage\n"
        "3. Functional Test Results\n"
        "4. Cross-browser Compatibility\n"
        "5. Accessibility Audit (WCAG)\n"
        "6. Performance Benchmarks\n"
        "7. Issues Found and Severity\n"
        "8. Recommendations"
    ),
    DeliverableKind.SECURITY_REPORT: (
        'Create a security audit report for "{project_title}" including:\n'
        "1. Security Assessment Summary\n"
        "2. Vulnerability Scan Results\n"
        "3. Authentication Review\n"
        "4. Data Handling Analysis\n"
        "5. OWASP Top 10 Check\n"
        "6. Risk Assessment\n"
        "7. Security Recommendations\n"
        "8. Clearance Status"
    ),
    DeliverableKind.DOCUMENTATION: (
        'Create documentation for "{project_title}" including:\n'
        "1. README (project overview, setup instructions)\n"
        "2. User Guide (how to use the product)\n"
        "3. API Documentation (if applicable)\n"
        "4. Deployment Guide\n"
        "5. Troubleshooting Guide\n"
        "6. Change Log"
    ),
    DeliverableKind.DEFAULT: "Complete the assigned task and provide a comprehensive deliverable.",
}

STATUS_MESSAGES: Dict[DeliverableKind, List[str]] = {
    DeliverableKind.INTAKE: [
        "Reviewing project requirements...",
        "Identifying key stakeholders and goals...",
        "Documenting initial assumptions...",
        "Finalizing project scope...",
    ],
    DeliverableKind.RESEARCH: [
        "Analyzing market landscape...",
        "Researching competitor products...",
        "Identifying target audience segments...",
        "Evaluating problem-solution fit...",
        "Preparing GO/NO-GO recommendation...",
    ],
    DeliverableKind.SPEC: [
        "Defining MVP scope boundaries...",
        "Writing user stories...",
        "Establishing acceptance criteria...",
        "Prioritizing features using MoSCoW...",
        "Documenting dependencies...",
    ],
    DeliverableKind.ARCHITECTURE: [
        "Evaluating technology options...",
        "Designing database schema...",
        "Planning API structure...",
        "Mapping system components...",
        "Documenting security considerations...",
    ],
    DeliverableKind.DESIGN: [
        "Establishing design system foundations...",
        "Creating wireframe layouts...",
        "Defining color and typography...",
        "Documenting component specifications...",
        "Planning responsive breakpoints...",
    ],
    DeliverableKind.CODEBASE: [
        "Setting up project structure...",
        "Implementing core components...",
        "Building data models and services...",
        "Integrating APIs and state management...",
        "Adding styling and responsive design...",
        "Finalizing implementation...",
    ],
    DeliverableKind.TEST_REPORT: [
        "Running functional tests...",
        "Checking cross-browser compatibility...",
        "Performing accessibility audit...",
        "Measuring performance benchmarks...",
        "Documenting findings...",
    ],
    DeliverableKind.SECURITY_REPORT: [
        "Running vulnerability scans...",
        "Reviewing authentication flows...",
        "Checking data handling practices...",
        "Evaluating OWASP Top 10 compliance...",
        "Preparing security clearance...",
    ],
    DeliverableKind.DOCUMENTATION: [
        "Writing project README...",
        "Creating user guide sections...",
        "Documenting API endpoints...",
        "Adding deployment instructions...",
        "Finalizing documentation...",
    ],
    DeliverableKind.DEFAULT: [
        "Processing requirements...",
        "Generating content...",
        "Reviewing output...",
        "Finalizing deliverable...",
    ],
}

DELIVERABLE_TITLES: Dict[DeliverableKind, str] = {
    DeliverableKind.INTAKE: "Project Brief",
    DeliverableKind.RESEARCH: "Research Report",
    DeliverableKind.SPEC: "Product Specification",
    DeliverableKind.ARCHITECTURE: "Architecture Document",
    DeliverableKind.DESIGN: "Design Specification",
    DeliverableKind.CODEBASE: "Implementation Code",
    DeliverableKind.TEST_REPORT: "Test Report",
    DeliverableKind.SECURITY_REPORT: "Security Audit",
    DeliverableKind.DOCUMENTATION: "Documentation",
    DeliverableKind.DEFAULT: "Deliverable",
}

RESPONSE_GUIDELINES = (
    "Please structure your response clearly with sections and bullet points where appropriate.\n"
    "Be thorough but concise. This is a real deliverable that will be used to advance the project."
)
