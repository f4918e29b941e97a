from mockinterview.schemas import CandidateProfile, PrimarySource
from mockinterview.sources import SOURCE_PRIORITY, select_source


def test_job_description_dominates_everything(make_context, rich_profile):
    ctx = make_context(
        job_description="Own the payments API.",
        resume_raw_text="Ten years of Java, Kafka and Kubernetes." * 50,
        candidate_profile=rich_profile,
    )
    assert select_source(ctx) == PrimarySource.JOB_DESCRIPTION


def test_resume_text_beats_structured_profile(make_context, rich_profile):
    ctx = make_context(resume_raw_text="Python developer", candidate_profile=rich_profile)
    assert select_source(ctx) == PrimarySource.RESUME_TEXT


def test_blank_job_description_is_skipped(make_context):
    ctx = make_context(job_description="   \n", resume_raw_text="Resume body")
    assert select_source(ctx) == PrimarySource.RESUME_TEXT


def test_structured_experience(make_context, experience_items):
    ctx = make_context(candidate_profile=CandidateProfile(work_experience=experience_items))
    assert select_source(ctx) == PrimarySource.STRUCTURED_EXPERIENCE_OR_PROJECTS


def test_projects_only_count_as_structured(make_context, project_items):
    ctx = make_context(candidate_profile=CandidateProfile(projects=project_items))
    assert select_source(ctx) == PrimarySource.STRUCTURED_EXPERIENCE_OR_PROJECTS


def test_falls_back_to_general_profile(make_context):
    ctx = make_context(
        job_description="",
        resume_raw_text=None,
        candidate_profile=CandidateProfile(key_skills=["Excel"], accomplishments="Employee of the month"),
    )
    assert select_source(ctx) == PrimarySource.GENERAL_PROFILE


def test_profile_defaults_when_omitted(make_context):
    ctx = make_context()
    assert ctx.candidate_profile.work_experience == []
    assert select_source(ctx) == PrimarySource.GENERAL_PROFILE


def test_priority_order_is_fixed():
    assert [source for source, _ in SOURCE_PRIORITY] == [
        PrimarySource.JOB_DESCRIPTION,
        PrimarySource.RESUME_TEXT,
        PrimarySource.STRUCTURED_EXPERIENCE_OR_PROJECTS,
        PrimarySource.GENERAL_PROFILE,
    ]
