"""Tests for the SteamWeb account operations."""

import json
import unittest
from unittest.mock import patch

from steam_web import SteamWeb
from steam_web.core.errors import BadRequest, NeedCookie, NotLoggedIn, TokenNearExpiry
from steam_web.core.login import verify_session
from steam_web.core.models import AvatarImage, PrivacySettings, Session
from steam_web.core.web_client import RetryPolicy
from tests.helpers import make_response, make_token

STEAM_ID = '76561198000000001'
SESSION = Session(steam_id=STEAM_ID, session_id='abc123',
                  cookies=f'sessionid=abc123; steamLoginSecure={STEAM_ID}%7C%7Ctoken;')
NOTIFICATIONS = {'notifications': {'1': 0}}

BADGES_PAGE = """<html><body>
<a class="global_action_link" href="#">Install Steam</a>
<div class="badge_row">
  <a class="badge_row_overlay" href="https://steamcommunity.com/profiles/76561198000000001/gamecards/620/"></a>
  <div class="badge_title_stats_playtime">5.2 hrs on record</div>
  <span class="progress_info_bold">2 card drops remaining</span>
  <div class="badge_title">Portal 2&nbsp;<div class="badge_view_details">View details</div></div>
</div>
{pager}
</body></html>"""


class SteamWebTestCase(unittest.TestCase):

    def setUp(self):
        self.steam = SteamWeb(retry_policy=RetryPolicy(retries=1, delay=0))
        self.addCleanup(self.steam.close)
        sleep_patcher = patch('steam_web.core.web_client.time.sleep')
        sleep_patcher.start()
        self.addCleanup(sleep_patcher.stop)

    def respond(self, *responses):
        patcher = patch.object(self.steam.web_client.session, 'request', side_effect=list(responses))
        mock = patcher.start()
        self.addCleanup(patcher.stop)
        return mock

    def use_session(self):
        self.respond(make_response(200, NOTIFICATIONS))
        self.steam.set_session(SESSION)


class TestSessionHandling(SteamWebTestCase):

    def test_operations_need_a_session(self):
        for operation in (self.steam.get_farmable_games, self.steam.get_cards_inventory,
                          self.steam.clear_aliases, self.steam.get_avatar_frame):
            with self.subTest(operation=operation.__name__):
                with self.assertRaises(NeedCookie):
                    operation()

    def test_set_session_with_empty_cookies(self):
        with self.assertRaises(NotLoggedIn):
            self.steam.set_session(Session(steam_id=STEAM_ID, session_id='abc', cookies=''))
        self.assertIsNone(self.steam.session)

    def test_set_session_rejected_by_steam(self):
        self.respond(make_response(200, '<html><script>g_steamID = false;</script></html>'))
        with self.assertRaises(NotLoggedIn):
            self.steam.set_session(SESSION)
        self.assertIsNone(self.steam.session)

    def test_set_session(self):
        request = self.respond(make_response(200, NOTIFICATIONS))
        self.steam.set_session(SESSION)
        self.assertEqual(self.steam.session, SESSION)
        self.assertEqual(request.call_args.kwargs['headers']['Cookie'], SESSION.cookies)

    def test_login_with_expiring_token(self):
        with self.assertRaises(TokenNearExpiry):
            self.steam.login(make_token(expires_in=10))

    def test_failed_login_leaves_no_partial_session(self):
        self.respond(make_response(200, 'not json'))
        with self.assertRaises(NotLoggedIn):
            self.steam.login(make_token(audience=['web']))
        self.assertIsNone(self.steam.session)
        self.assertEqual(self.steam.store.cookie_header, '')

    def test_set_session_without_session_id_gets_one(self):
        self.respond(make_response(200, NOTIFICATIONS))
        self.steam.set_session(Session(steam_id=STEAM_ID, session_id='',
                                       cookies=f'steamLoginSecure={STEAM_ID}%7C%7Ctoken;'))

        session = self.steam.session
        self.assertIsNotNone(session)
        self.assertEqual(len(session.session_id), 24)
        self.assertIn(f'sessionid={session.session_id};', session.cookies)

        request = self.respond(make_response(200, {'success': 1}))
        self.steam.change_privacy('private')
        self.assertEqual(request.call_args.kwargs['data']['sessionid'], session.session_id)

    def test_logout_clears_session(self):
        self.use_session()
        request = self.respond(make_response(200, ''))
        self.steam.logout()
        self.assertEqual(request.call_args.kwargs['data'], {'sessionid': 'abc123'})
        self.assertIsNone(self.steam.session)
        self.assertIsNone(self.steam.steam_id)

    def test_logout_clears_cookie_jar(self):
        self.use_session()
        jar = self.steam.web_client.session.cookies
        jar.set('steamLoginSecure', 'SECRET', domain='steamcommunity.com')
        self.respond(make_response(200, ''))
        self.steam.logout()
        self.assertEqual(len(jar), 0)

    def test_failed_login_clears_cookie_jar(self):
        jar = self.steam.web_client.session.cookies
        jar.set('steamLoginSecure', 'SECRET', domain='steamcommunity.com')
        self.respond(make_response(200, 'not json'))
        with self.assertRaises(NotLoggedIn):
            self.steam.login(make_token(audience=['web']))
        self.assertEqual(len(jar), 0)

    def test_rejected_session_clears_cookie_jar(self):
        jar = self.steam.web_client.session.cookies

        def verify_after_set_cookie(client, store):
            # requests stores response cookies in its jar before the body is checked
            jar.set('steamLoginSecure', 'SECRET', domain='steamcommunity.com')
            return verify_session(client, store)

        self.respond(make_response(200, 'not json'))
        with patch('steam_web.core.steam_web.verify_session', side_effect=verify_after_set_cookie):
            with self.assertRaises(NotLoggedIn):
                self.steam.set_session(SESSION)
        self.assertEqual(len(jar), 0)


class TestAccountOperations(SteamWebTestCase):

    def setUp(self):
        super().setUp()
        self.use_session()

    def test_get_farmable_games(self):
        self.respond(make_response(200, BADGES_PAGE.format(pager='')))
        games = self.steam.get_farmable_games()
        self.assertEqual([(g.app_id, g.remaining_cards, g.play_time, g.name) for g in games],
                         [(620, 2, 5.2, 'Portal 2')])

    def test_get_farmable_games_walks_pages(self):
        pager = '<a class="pagelink" href="?p=2">2</a>'
        request = self.respond(make_response(200, BADGES_PAGE.format(pager=pager)),
                               make_response(200, BADGES_PAGE.format(pager=pager)))
        games = self.steam.get_farmable_games()
        self.assertEqual(len(games), 2)
        self.assertEqual(request.call_args.kwargs['params'], {'p': 2})

    def test_get_farmable_games_logged_out(self):
        page = BADGES_PAGE.format(pager='').replace('Install Steam', 'login')
        self.respond(make_response(200, page))
        with self.assertRaises(NotLoggedIn):
            self.steam.get_farmable_games()

    def test_get_cards_inventory(self):
        request = self.respond(make_response(200, {
            'success': True,
            'rgInventory': {'1': {'id': '100', 'classid': '5', 'instanceid': '0', 'amount': '1'}},
            'rgDescriptions': {'5_0': {'icon_url': 'x', 'name': 'Card', 'type': 'Trading Card', 'tradable': 1}},
        }))
        items = self.steam.get_cards_inventory()
        self.assertEqual(len(items), 1)
        self.assertEqual(items[0].context_id, '6')
        self.assertTrue(request.call_args.args[1].endswith(f'/profiles/{STEAM_ID}/inventory/json/753/6'))

    def test_set_cookie_updates_session(self):
        self.respond(make_response(200, {'success': True, 'rgInventory': [], 'rgDescriptions': []},
                                   headers={'set-cookie': 'sessionid=fresh; Path=/'}))
        self.steam.get_cards_inventory()
        self.assertEqual(self.steam.session.session_id, 'fresh')

    def test_change_privacy_preset(self):
        request = self.respond(make_response(200, {'success': 1, 'Privacy': {}}))
        self.steam.change_privacy('private')

        form = request.call_args.kwargs['data']
        self.assertEqual(form['sessionid'], 'abc123')
        self.assertEqual(form['eCommentPermission'], '2')
        privacy = json.loads(form['Privacy'])
        self.assertEqual(privacy['PrivacyProfile'], 1)
        self.assertNotIn('eCommentPermission', privacy)

    def test_change_privacy_failure(self):
        self.respond(make_response(200, {'success': 8}))
        with self.assertRaises(BadRequest):
            self.steam.change_privacy(PrivacySettings.from_preset('public'))

    def test_clear_aliases(self):
        request = self.respond(make_response(200, ''))
        self.steam.clear_aliases()
        self.assertEqual(request.call_args.kwargs['data'], {'sessionid': 'abc123'})
        self.assertTrue(request.call_args.args[1].endswith('/ajaxclearaliashistory/'))

    def test_clear_aliases_logged_out(self):
        self.respond(make_response(200, '<script>var g_steamID = false;</script>'))
        with self.assertRaises(NotLoggedIn):
            self.steam.clear_aliases()

    def test_change_avatar_from_bytes(self):
        request = self.respond(make_response(200, {
            'success': True, 'images': {'0': 'a', 'full': 'https://avatars.steamstatic.com/x_full.jpg'},
            'hash': 'x', 'message': ''}))
        url = self.steam.change_avatar(AvatarImage(b'\xff\xd8jpeg', 'image/jpeg'))

        self.assertEqual(url, 'https://avatars.steamstatic.com/x_full.jpg')
        kwargs = request.call_args.kwargs
        self.assertEqual(kwargs['files']['avatar'], ('blob', b'\xff\xd8jpeg', 'image/jpeg'))
        self.assertEqual(kwargs['data']['type'], 'player_avatar_image')
        self.assertEqual(kwargs['data']['sId'], STEAM_ID)
        self.assertEqual(kwargs['data']['sessionid'], 'abc123')

    def test_change_avatar_from_url(self):
        request = self.respond(
            make_response(200, b'PNGDATA', headers={'content-type': 'image/png'}),
            make_response(200, {'success': True, 'images': {'full': 'https://full'}}),
        )
        self.assertEqual(self.steam.change_avatar('https://example.com/a.png'), 'https://full')

        download_headers = request.call_args_list[0].kwargs.get('headers') or {}
        self.assertNotIn('Cookie', download_headers)
        self.assertEqual(request.call_args_list[1].kwargs['files']['avatar'], ('blob', b'PNGDATA', 'image/png'))

    def test_change_avatar_bad_steam_id(self):
        self.respond(make_response(200, '#Error_BadOrMissingSteamID'))
        with self.assertRaises(NotLoggedIn):
            self.steam.change_avatar(b'jpeg')

    def test_change_avatar_rejected(self):
        self.respond(make_response(200, {'success': False, 'message': 'Invalid image'}))
        with self.assertRaises(BadRequest) as ctx:
            self.steam.change_avatar(b'jpeg')
        self.assertEqual(str(ctx.exception), 'Invalid image')

    def test_get_avatar_frame(self):
        self.respond(make_response(200, '<div class="profile_avatar_frame"><img src="https://frame.png"></div>'))
        self.assertEqual(self.steam.get_avatar_frame(), 'https://frame.png')

    def test_no_avatar_frame(self):
        self.respond(make_response(200, '<div class="playerAvatar"></div>'))
        self.assertIsNone(self.steam.get_avatar_frame())


if __name__ == '__main__':
    unittest.main()
