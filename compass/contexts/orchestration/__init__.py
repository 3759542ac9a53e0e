"""
Orchestration Context

Responsibilities:
- Runs the automation flow (analyze -> compare -> recommend -> optimize -> re-score)
  whenever a job is saved
- Analyzes the application pipeline (momentum, stalled applications, next steps, health)

Owns: Sequencing across contexts, pipeline analytics
Never: Re-implements scoring rules owned by other contexts
"""

from compass.contexts.orchestration.automation_flow import (
    FlowResult,
    generate_resume_improvement_suggestions,
    handle_job_saved,
    run_full_job_application_flow,
)
from compass.contexts.orchestration.pipeline_analytics import (
    ApplicationMomentum,
    NextSteps,
    PipelineHealth,
    analyze_application_momentum,
    calculate_pipeline_health,
    generate_next_steps,
    identify_stalled_applications,
)

__all__ = [
    # Automation flow
    "FlowResult",
    "run_full_job_application_flow",
    "generate_resume_improvement_suggestions",
    "handle_job_saved",
    # Pipeline analytics
    "ApplicationMomentum",
    "NextSteps",
    "PipelineHealth",
    "analyze_application_momentum",
    "identify_stalled_applications",
    "generate_next_steps",
    "calculate_pipeline_health",
]
