#!/usr/bin/env python3
"""
Unit tests for the field rules and per-entity validators.

Run with:
    python -m pytest tests/test_validators.py
"""
import os
import sys
import unittest

sys.path.insert(0, os.path.dirname(os.path.dirname(os.path.abspath(__file__))))

from sqlalchemy.orm import sessionmaker

import database
from database import Restaurant, Review, User
from restaurant_reviews.errors import (
    FieldValidationError, ReferenceNotFound, UniquenessConflict,
)
from restaurant_reviews.repositories import (
    RestaurantRepository, ReviewRepository, UserRepository,
)
from restaurant_reviews.validators import (
    FieldRule, RestaurantValidator, ReviewValidator, UserValidator,
)


# ---------------------------------------------------------------------------
# Helpers – lightweight in-memory SQLite DB via SQLAlchemy
# ---------------------------------------------------------------------------

def _make_session():
    """Return a fresh in-memory SQLAlchemy session with all tables created."""
    engine = database.make_engine('sqlite://')
    database.Base.metadata.create_all(engine)
    Session = sessionmaker(bind=engine)
    return Session()


def _user(**overrides):
    fields = {'name': 'Jack Doe', 'email': 'jack@mailinator.com',
              'phone_number': '01234567891'}
    fields.update(overrides)
    return User(**fields)


def _restaurant(**overrides):
    fields = {'name': 'The Fat Duck', 'post_code': 'NE17RU',
              'phone_number': '01912223344'}
    fields.update(overrides)
    return Restaurant(**fields)


# ===========================================================================
# FieldRule
# ===========================================================================

class TestFieldRule(unittest.TestCase):

    def test_none_on_required_field(self):
        self.assertEqual(FieldRule('name').check(None), 'may not be null')

    def test_none_on_optional_field_passes(self):
        self.assertIsNone(FieldRule('name', required=False).check(None))

    def test_size_reported_before_pattern(self):
        rule = FieldRule('name', min_length=1, max_length=50, pattern=r'[a-z]+')
        self.assertEqual(rule.check(''), 'size must be between 1 and 50')

    def test_too_long(self):
        rule = FieldRule('name', min_length=1, max_length=5)
        self.assertEqual(rule.check('abcdef'), 'size must be between 1 and 5')

    def test_default_pattern_message(self):
        rule = FieldRule('phoneNumber', pattern=r'0[0-9]{10}')
        self.assertEqual(rule.check('12345'), 'must match "0[0-9]{10}"')

    def test_pattern_must_match_whole_value(self):
        rule = FieldRule('rating', pattern=r'[0-5]')
        self.assertIsNotNone(rule.check('45'))
        self.assertIsNone(rule.check('4'))

    def test_not_empty(self):
        self.assertEqual(FieldRule('email', not_empty=True).check(''), 'may not be empty')

    def test_wrong_type(self):
        self.assertEqual(FieldRule('name').check(42), 'must be a string')

    def test_int_kind_rejects_strings_and_bools(self):
        rule = FieldRule('userId', kind=int)
        self.assertEqual(rule.check('1'), 'must be a number')
        self.assertEqual(rule.check(True), 'must be a number')
        self.assertIsNone(rule.check(7))

    def test_int_kind_bounds(self):
        rule = FieldRule('userId', kind=int, min_value=0, max_value=10)
        self.assertEqual(rule.check(-1), 'must be greater than or equal to 0')
        self.assertEqual(rule.check(11), 'must be less than or equal to 10')
        self.assertIsNone(rule.check(10))


# ===========================================================================
# UserValidator
# ===========================================================================

class TestUserValidator(unittest.TestCase):

    def setUp(self):
        self.db = _make_session()
        self.repo = UserRepository()
        self.validator = UserValidator(self.repo)

    def tearDown(self):
        self.db.close()

    def test_valid_user_passes(self):
        self.validator.validate(self.db, _user())

    def test_empty_fields_report_all_three(self):
        with self.assertRaises(FieldValidationError) as ctx:
            self.validator.validate(self.db, _user(name='', email='', phone_number=''))
        self.assertEqual(set(ctx.exception.reasons), {'name', 'email', 'phoneNumber'})

    def test_name_with_digits(self):
        with self.assertRaises(FieldValidationError) as ctx:
            self.validator.validate(self.db, _user(name='Jack 2'))
        self.assertEqual(ctx.exception.reasons,
                         {'name': 'Please use a name without numbers or specials'})

    def test_name_allows_hyphen_and_apostrophe(self):
        self.validator.validate(self.db, _user(name="Mary-Jane O'Neil"))

    def test_bad_email_format(self):
        with self.assertRaises(FieldValidationError) as ctx:
            self.validator.validate(self.db, _user(email='not-an-email'))
        self.assertEqual(ctx.exception.reasons['email'],
                         'The email address must be in the format of name@domain.com')

    def test_phone_must_start_with_zero(self):
        with self.assertRaises(FieldValidationError) as ctx:
            self.validator.validate(self.db, _user(phone_number='11234567891'))
        self.assertIn('phoneNumber', ctx.exception.reasons)

    def test_duplicate_email_conflicts(self):
        self.repo.create(self.db, _user())
        with self.assertRaises(UniquenessConflict) as ctx:
            self.validator.validate(self.db, _user(name='John Doe', phone_number='01334567894'))
        self.assertEqual(ctx.exception.field, 'email')

    def test_field_errors_win_over_conflict(self):
        self.repo.create(self.db, _user())
        with self.assertRaises(FieldValidationError):
            self.validator.validate(self.db, _user(name=''))

    def test_update_keeping_own_email_passes(self):
        saved = self.repo.create(self.db, _user())
        self.validator.validate(self.db, _user(id=saved.id, name='Jack Smith'))

    def test_update_taking_another_users_email_conflicts(self):
        self.repo.create(self.db, _user())
        other = self.repo.create(self.db, _user(email='jill@mailinator.com'))
        with self.assertRaises(UniquenessConflict):
            self.validator.validate(self.db, _user(id=other.id))


# ===========================================================================
# RestaurantValidator
# ===========================================================================

class TestRestaurantValidator(unittest.TestCase):

    def setUp(self):
        self.db = _make_session()
        self.repo = RestaurantRepository()
        self.validator = RestaurantValidator(self.repo)

    def tearDown(self):
        self.db.close()

    def test_valid_restaurant_passes(self):
        self.validator.validate(self.db, _restaurant())

    def test_empty_fields_report_all_three(self):
        with self.assertRaises(FieldValidationError) as ctx:
            self.validator.validate(
                self.db, _restaurant(name='', post_code='', phone_number=''))
        self.assertEqual(len(ctx.exception.reasons), 3)

    def test_post_code_must_be_six_alphanumerics(self):
        with self.assertRaises(FieldValidationError) as ctx:
            self.validator.validate(self.db, _restaurant(post_code='NE1 7RU'))
        self.assertEqual(list(ctx.exception.reasons), ['postCode'])

    def test_duplicate_phone_number_conflicts(self):
        self.repo.create(self.db, _restaurant())
        with self.assertRaises(UniquenessConflict) as ctx:
            self.validator.validate(self.db, _restaurant(name='Other Place'))
        self.assertEqual(ctx.exception.field, 'phoneNumber')


# ===========================================================================
# ReviewValidator
# ===========================================================================

class TestReviewValidator(unittest.TestCase):

    def setUp(self):
        self.db = _make_session()
        self.users = UserRepository()
        self.repo = ReviewRepository()
        self.validator = ReviewValidator(self.repo, self.users)
        self.user = self.users.create(self.db, _user())

    def tearDown(self):
        self.db.close()

    def _review(self, **overrides):
        fields = {'user_id': self.user.id, 'restaurant_id': 1,
                  'review': 'Great food', 'rating': '4'}
        fields.update(overrides)
        return Review(**fields)

    def test_valid_review_passes(self):
        self.validator.validate(self.db, self._review())

    def test_rating_out_of_range(self):
        with self.assertRaises(FieldValidationError) as ctx:
            self.validator.validate(self.db, self._review(rating='6'))
        self.assertEqual(ctx.exception.reasons,
                         {'rating': 'Please use a number between 0 and 5'})

    def test_review_text_with_digits(self):
        with self.assertRaises(FieldValidationError) as ctx:
            self.validator.validate(self.db, self._review(review='10 out of 10'))
        self.assertIn('review', ctx.exception.reasons)

    def test_missing_ids_reported(self):
        with self.assertRaises(FieldValidationError) as ctx:
            self.validator.validate(self.db, self._review(user_id=None, restaurant_id=None))
        self.assertEqual(set(ctx.exception.reasons), {'userId', 'restaurantId'})

    def test_ids_too_large_for_storage_reported(self):
        with self.assertRaises(FieldValidationError) as ctx:
            self.validator.validate(self.db, self._review(user_id=10 ** 20,
                                                          restaurant_id=-10 ** 20))
        self.assertEqual(ctx.exception.reasons, {
            'userId': f'must be less than or equal to {database.MAX_ID}',
            'restaurantId': f'must be greater than or equal to {database.MIN_ID}',
        })

    def test_unknown_user(self):
        with self.assertRaises(ReferenceNotFound) as ctx:
            self.validator.validate(self.db, self._review(user_id=999))
        self.assertEqual(ctx.exception.field, 'userId')

    def test_second_review_of_same_restaurant_conflicts(self):
        self.repo.create(self.db, self._review())
        with self.assertRaises(UniquenessConflict) as ctx:
            self.validator.validate(self.db, self._review(review='Still great'))
        self.assertEqual(ctx.exception.field, 'review')

    def test_review_of_another_restaurant_passes(self):
        self.repo.create(self.db, self._review())
        self.validator.validate(self.db, self._review(restaurant_id=2))


if __name__ == '__main__':
    unittest.main()
