"""
================================================================================
Table Page Object
================================================================================

CRUD flow on the customers table:
  - tick the checkboxes of rows whose country matches
  - delete the ticked rows
  - add rows through the Company / Contact / Country form
  - follow the success link once the table is in the expected state

================================================================================
"""

from __future__ import annotations

from typing import Iterable

import allure
from loguru import logger

from testsuites.ui_testing.framework.config import TABLE_PAGE_SUFFIX
from testsuites.ui_testing.framework.page_base import BasePage


class TablePage(BasePage):
    """Table page object."""

    URL_SUFFIX = TABLE_PAGE_SUFFIX

    TABLE = "#customers"
    DELETE_BUTTON = "xpath=//input[@type='button' and @value='Delete']"
    ADD_BUTTON = "xpath=//input[@type='button' and @value='Add']"
    COMPANY_INPUT = "xpath=//label[text()='Company']/following-sibling::input"
    CONTACT_INPUT = "xpath=//label[text()='Contact']/following-sibling::input"
    COUNTRY_INPUT = "xpath=//label[text()='Country']/following-sibling::input"
    SUCCESS_LINK = "xpath=//a[@href and text()='Great! Return to menu']"

    @allure.step("Open table page")
    def open(self) -> "TablePage":
        self.navigate()
        self.actions.wait_for_element(self.TABLE, description="customers table", state="attached")
        return self

    @staticmethod
    def country_checkboxes_xpath(countries: Iterable[str]) -> str:
        """XPath (relative to the table) of checkboxes in rows of the given countries."""
        condition = " or ".join(f"text()='{country}'" for country in countries)
        return f"xpath=.//td[{condition}]/parent::tr//input[@type='checkbox']"

    @allure.step("Select rows by country: {countries}")
    def select_rows_by_country(self, countries: Iterable[str]) -> int:
        """
        Tick every row whose country cell matches one of ``countries``.

        Returns:
            Number of rows selected
        """
        checkboxes = self.page.locator(self.TABLE).locator(
            self.country_checkboxes_xpath(countries)
        )
        total = checkboxes.count()
        for index in range(total):
            self.actions.check_checkbox(checkboxes.nth(index), description=f"row checkbox #{index + 1}")

        logger.info(f"Selected {total} rows")
        return total

    @allure.step("Delete selected rows")
    def delete_selected(self) -> None:
        self.actions.click_element(self.DELETE_BUTTON, description="Delete button")

    @allure.step("Add record: {company} / {contact} / {country}")
    def add_record(self, company: str, contact: str, country: str) -> None:
        self.actions.fill_input(self.COMPANY_INPUT, company, description="Company")
        self.actions.fill_input(self.CONTACT_INPUT, contact, description="Contact")
        self.actions.fill_input(self.COUNTRY_INPUT, country, description="Country")
        self.actions.click_element(self.ADD_BUTTON, description="Add button")

    def row_count(self) -> int:
        return self.actions.count(f"{self.TABLE} tr")

    def is_success_link_visible(self) -> bool:
        return self.actions.is_visible(self.SUCCESS_LINK)

    @allure.step("Follow success link")
    def follow_success_link(self) -> None:
        self.actions.click_element(self.SUCCESS_LINK, description="success link")
