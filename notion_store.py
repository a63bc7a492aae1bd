import logging
from datetime import datetime

import httpx
from notion_client import APIErrorCode, Client
from notion_client.errors import APIResponseError, HTTPResponseError, RequestTimeoutError

import golf_config
from errors import SignupLimitReached, StorageError

logger = logging.getLogger(__name__)


class UserNotFound(StorageError):
    """No user page exists for the given id"""


def _title_text(prop):
    items = (prop or {}).get('title') or []
    return items[0].get('plain_text') if items else None


def _select_name(prop):
    selected = (prop or {}).get('select')
    return selected.get('name') if selected else None


def user_from_page(page):
    """Flatten a Users database page into the summary the web client reads"""
    props = page.get('properties', {})
    return {
        'id': page['id'],
        'name': _title_text(props.get('Name')) or 'Unnamed',
        'level': _select_name(props.get('Level')) or '1',
        'status': _select_name(props.get('Level Status')) or 'IN_PROGRESS',
        'growthIndex': (props.get('Growth Index') or {}).get('number') or 0,
    }


class NotionStore:
    def __init__(self, client=None, databases=None, signup_limit=None):
        """Initialize the store with a Notion client and database ids"""
        self.client = client or Client(auth=golf_config.NOTION_API_KEY)
        self.databases = databases or golf_config.NOTION_DATABASES
        self.signup_limit = golf_config.USER_SIGNUP_LIMIT if signup_limit is None else signup_limit

    def _call(self, action, fn, not_found=StorageError, **kwargs):
        try:
            return fn(**kwargs)
        except APIResponseError as e:
            if e.code == APIErrorCode.ObjectNotFound:
                raise not_found(f"{action}: {e}") from e
            logger.error("✗ %s failed: %s", action, e)
            raise StorageError(f"{action} failed") from e
        except (HTTPResponseError, RequestTimeoutError, httpx.HTTPError) as e:
            logger.error("✗ %s failed: %s", action, e)
            raise StorageError(f"{action} failed") from e

    def list_users(self):
        """All users, sorted by name"""
        response = self._call(
            'List users',
            self.client.databases.query,
            database_id=self.databases['users'],
            sorts=[{'property': 'Name', 'direction': 'ascending'}],
        )
        users = [user_from_page(page) for page in response.get('results', [])]
        logger.debug("Fetched %d users", len(users))
        return users

    def get_user(self, user_id):
        page = self._call('Get user', self.client.pages.retrieve, not_found=UserNotFound, page_id=user_id)
        return user_from_page(page)

    def create_user(self, name):
        """Sign up a new user at level 1, unless the cohort is full"""
        existing = self._call(
            'Count users',
            self.client.databases.query,
            database_id=self.databases['users'],
            page_size=100,
        )
        if len(existing.get('results', [])) >= self.signup_limit:
            logger.info("Signup refused for %r: limit of %d users reached", name, self.signup_limit)
            raise SignupLimitReached(
                f"The first {self.signup_limit} signups are full. Please wait for the next cohort!"
            )

        page = self._call(
            'Create user',
            self.client.pages.create,
            parent={'database_id': self.databases['users']},
            properties={
                'Name': {'title': [{'text': {'content': name}}]},
                'Level': {'select': {'name': '1'}},
                'Level Status': {'select': {'name': 'IN_PROGRESS'}},
                'Growth Index': {'number': 0},
            },
        )
        logger.info("✓ Created user: %s", name)
        return user_from_page(page)

    def update_level(self, user_id, level):
        """Move a user to a new level (admin approval)"""
        page = self._call(
            'Update level',
            self.client.pages.update,
            not_found=UserNotFound,
            page_id=user_id,
            properties={'Level': {'select': {'name': level}}},
        )
        logger.info("✓ User %s moved to level %s", user_id, level)
        return user_from_page(page)

    def save_analysis(self, user_id, level, metrics, result, created_at=None):
        """Record one swing analysis in the Swing Analysis database"""
        created_at = created_at or datetime.now()
        try:
            level_number = int(level)
        except (TypeError, ValueError):
            level_number = None

        page = self._call(
            'Save analysis',
            self.client.pages.create,
            parent={'database_id': self.databases['swing_analysis']},
            properties={
                'User': {'relation': [{'id': user_id}]},
                'Level': {'number': level_number},
                'Analysis Name': {'title': [{'text': {'content': f"Analysis {created_at:%Y-%m-%d %H:%M:%S}"}}]},
                'Address Angle': {'number': metrics.address_score},
                'Balance Score': {'number': metrics.balance_score},
                'Swing Path': {'select': {'name': metrics.swing_path.value}},
                'Impact Timing': {'select': {'name': metrics.impact_timing.value}},
                'Consistency Score': {'number': result.consistency_score},
                'AI Comment': {'rich_text': [{'text': {'content': result.comment}}]},
            },
        )
        logger.info("✓ Analysis saved for user %s: %s", user_id, page.get('id'))
        return page

    def describe_users_schema(self):
        """Property names of the Users database, as a startup configuration check"""
        database = self._call(
            'Retrieve users schema',
            self.client.databases.retrieve,
            database_id=self.databases['users'],
        )
        properties = sorted(database.get('properties', {}))
        logger.info("Users DB properties: %s", properties)
        return properties
