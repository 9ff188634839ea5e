"""LinkedIn DOM locator table.

Pipeline code refers to locators only by attribute name. Every default can be
overridden from the ``selectors:`` section of settings.yaml when LinkedIn
changes its markup.
"""

from pydantic import BaseModel, ConfigDict


class Selectors(BaseModel):
    """Semantic name -> CSS locator."""

    model_config = ConfigDict(frozen=True, extra="forbid")

    # --- Job search form ---
    keyword_input: str = 'input[id*="jobs-search-box-keyword-id"]'
    location_input: str = 'input[id*="jobs-search-box-location-id"]'
    search_submit_button: str = "button.jobs-search-box__submit-button"

    # --- Results list ---
    search_result_count_text: str = "small.jobs-search-results-list__text"
    search_result_item: str = "li.scaffold-layout__list-item[data-occludable-job-id]"
    search_result_item_link: str = "a.job-card-list__title--link"
    search_result_item_company_name: str = "div.artdeco-entity-lockup__subtitle > span"

    # --- Detail panel ---
    job_description: str = "#job-details span"
    easy_apply_button_enabled: str = (
        "div.jobs-apply-button--top-card button.jobs-apply-button:enabled"
    )
    applied_to_job_feedback: str = ".artdeco-inline-feedback"


DEFAULT_SELECTORS = Selectors()
