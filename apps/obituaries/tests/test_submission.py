"""
Tests for the obituary submission wizard.
"""
from django.test import TestCase

from apps.obituaries.models import Obituary
from apps.obituaries.submission import SubmissionWizard, WizardStep

from .helpers import make_session


def filled_wizard():
    wizard = SubmissionWizard(title="RIP Quibi", blurb="Ten-minute shows for nobody.")
    wizard.next_step()
    wizard.add_cause('bad-timing')
    wizard.next_step()
    wizard.story_md = "## What happened\nPhones already had YouTube."
    wizard.next_step()
    return wizard


class WizardNavigationTest(TestCase):

    def test_basics_gate(self):
        wizard = SubmissionWizard(title="RIP Quibi")
        self.assertFalse(wizard.can_proceed())
        self.assertFalse(wizard.next_step())
        self.assertEqual(wizard.step, WizardStep.BASICS)

        wizard.blurb = "   "
        self.assertFalse(wizard.can_proceed())

        wizard.blurb = "Short-form streaming."
        self.assertTrue(wizard.next_step())
        self.assertEqual(wizard.step, WizardStep.CAUSES)

    def test_causes_gate(self):
        wizard = SubmissionWizard(title="T", blurb="B", step=WizardStep.CAUSES)
        self.assertFalse(wizard.next_step())
        wizard.add_cause('ai-hype')
        self.assertTrue(wizard.next_step())
        self.assertEqual(wizard.step, WizardStep.STORY)

    def test_media_step_is_optional_and_last(self):
        wizard = filled_wizard()
        self.assertEqual(wizard.step, WizardStep.MEDIA)
        self.assertTrue(wizard.can_proceed())
        self.assertFalse(wizard.next_step())

    def test_going_back_keeps_data(self):
        wizard = filled_wizard()
        while wizard.previous_step():
            pass

        self.assertEqual(wizard.step, WizardStep.BASICS)
        self.assertEqual(wizard.title, "RIP Quibi")
        self.assertEqual(wizard.causes, ['bad-timing'])
        self.assertIn("YouTube", wizard.story_md)


class WizardCausesTest(TestCase):

    def test_toggle_and_custom(self):
        wizard = SubmissionWizard()
        wizard.add_cause('ai-hype')
        wizard.add_cause('ai-hype')
        self.assertEqual(wizard.causes, ['ai-hype'])

        self.assertTrue(wizard.add_custom_cause('  vc-ghosting  '))
        self.assertFalse(wizard.add_custom_cause('vc-ghosting'))
        self.assertFalse(wizard.add_custom_cause('   '))

        wizard.remove_cause('ai-hype')
        self.assertEqual(wizard.causes, ['vc-ghosting'])


class WizardMediaTest(TestCase):

    def test_uploads_come_before_gifs(self):
        wizard = SubmissionWizard()
        wizard.add_gif('https://media.tenor.com/a.gif')
        wizard.attach_uploads(['https://cdn.test/1.png', 'https://cdn.test/2.mp4'])
        wizard.add_gif('https://media.tenor.com/b.gif')

        self.assertEqual(wizard.all_media_urls, [
            'https://cdn.test/1.png',
            'https://cdn.test/2.mp4',
            'https://media.tenor.com/a.gif',
            'https://media.tenor.com/b.gif',
        ])

    def test_remove_gif_by_index(self):
        wizard = SubmissionWizard(selected_gifs=['a', 'b', 'c'])
        wizard.remove_gif(1)
        wizard.remove_gif(10)
        self.assertEqual(wizard.selected_gifs, ['a', 'c'])


class WizardSubmitTest(TestCase):

    def test_success_redirects_to_new_post(self):
        _, session = make_session()
        wizard = filled_wizard()
        wizard.attach_uploads(['https://cdn.test/logo.png'])
        wizard.add_gif('https://media.tenor.com/rip.gif')

        obituary = wizard.submit(session)

        self.assertIsNotNone(obituary)
        self.assertEqual(wizard.redirect_to, f"/obituary/{obituary.id}")
        self.assertIsNone(wizard.error_message)
        self.assertFalse(wizard.is_submitting)
        obituary.refresh_from_db()
        self.assertEqual(obituary.media_urls, ['https://cdn.test/logo.png', 'https://media.tenor.com/rip.gif'])

    def test_failure_keeps_draft(self):
        wizard = filled_wizard()

        result = wizard.submit(None)

        self.assertIsNone(result)
        self.assertTrue(wizard.error_message.startswith("Failed to create obituary:"))
        self.assertIsNone(wizard.redirect_to)
        self.assertFalse(wizard.is_submitting)
        self.assertEqual(wizard.step, WizardStep.MEDIA)
        self.assertEqual(wizard.title, "RIP Quibi")
        self.assertEqual(Obituary.objects.count(), 0)
