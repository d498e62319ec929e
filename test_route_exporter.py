import io
import json
import os
import tempfile
import unittest
import xml.etree.ElementTree as ET
from datetime import datetime, timezone
from unittest.mock import patch, MagicMock

import requests

import schweizmobil_gpx
from schweizmobil.errors import RouteNotFoundError, TransportError
from schweizmobil.geo_utils import lv03_to_wgs84
from schweizmobil.interfaces import GeoPoint
from schweizmobil.route_exporter import RouteExporter
from schweizmobil.route_types import RouteIdentifier
from schweizmobil.visualization import create_track_map

NS = {'gpx': 'http://www.topografix.com/GPX/1/1'}
GEOMETRY = b'{"features":[{"geometry":{"coordinates":[[[600000,200000],[601000,201000]]]}}]}'


def fake_service(title="Via Alpina", geometry=GEOMETRY):
    """Stand-in for requests.get answering both service queries."""
    def get(url, params=None, timeout=None):
        response = MagicMock()
        response.status_code = 200
        response.raise_for_status = MagicMock()
        if 'route_or_segment' in url:
            response.content = json.dumps({"title": title}).encode('utf-8')
        else:
            response.content = geometry
        return response
    return get


def read_trkpts(path):
    root = ET.parse(path).getroot()
    return root, root.findall('gpx:trk/gpx:trkseg/gpx:trkpt', NS)


class TestRouteExporter(unittest.TestCase):
    def setUp(self):
        self.tmp = tempfile.TemporaryDirectory()
        self.addCleanup(self.tmp.cleanup)
        self.clock = lambda: datetime(2024, 5, 1, 8, 30, tzinfo=timezone.utc)
        self.identifier = RouteIdentifier.parse("national", "1")

    @patch('schweizmobil.data_loader.requests.get')
    def test_end_to_end_two_points(self, mock_get):
        mock_get.side_effect = fake_service()
        result = RouteExporter(clock=self.clock).export(self.identifier, output=self.tmp.name,
                                                        use_title=False)

        self.assertEqual(result.route_name, "national-1")
        self.assertEqual(str(result.output_path), os.path.join(self.tmp.name, "national-1.gpx"))
        self.assertEqual(mock_get.call_count, 1)

        root, trkpts = read_trkpts(result.output_path)
        self.assertEqual(len(trkpts), 2)
        expected = [lv03_to_wgs84(600000, 200000), lv03_to_wgs84(601000, 201000)]
        for trkpt, (lat, lon) in zip(trkpts, expected):
            self.assertEqual(float(trkpt.get('lat')), lat)
            self.assertEqual(float(trkpt.get('lon')), lon)
        self.assertAlmostEqual(float(trkpts[0].get('lat')), 46.951, places=3)
        self.assertAlmostEqual(float(trkpts[0].get('lon')), 7.438, delta=1e-3)
        self.assertEqual(root.find('gpx:metadata/gpx:time', NS).text, '2024-05-01T08:30:00.000Z')

        self.assertEqual(result.summary.point_count, 2)
        self.assertAlmostEqual(result.summary.length_m, 1414.2135623730951)
        self.assertIsNone(result.map_path)

    @patch('schweizmobil.data_loader.requests.get')
    def test_title_names_track_and_file(self, mock_get):
        mock_get.side_effect = fake_service(title="Via Alpina & Co")
        result = RouteExporter(clock=self.clock).export(self.identifier, output=self.tmp.name)

        self.assertEqual(result.route_name, "Via Alpina & Co")
        self.assertEqual(result.output_path.name, "via-alpina-co.gpx")
        root, _ = read_trkpts(result.output_path)
        self.assertEqual(root.find('gpx:trk/gpx:name', NS).text, "Via Alpina & Co")

    @patch('schweizmobil.data_loader.requests.get')
    def test_missing_title_falls_back_to_identifier(self, mock_get):
        mock_get.side_effect = fake_service(title=None)
        result = RouteExporter(clock=self.clock).export(self.identifier, output=self.tmp.name)
        self.assertEqual(result.route_name, "national-1")
        self.assertEqual(result.output_path.name, "national-1.gpx")

    @patch('schweizmobil.data_loader.requests.get')
    def test_explicit_output_file(self, mock_get):
        mock_get.side_effect = fake_service()
        target = os.path.join(self.tmp.name, "nested", "alpina.gpx")
        result = RouteExporter(clock=self.clock).export(self.identifier, output=target)
        self.assertEqual(str(result.output_path), target)
        self.assertTrue(os.path.exists(target))

    @patch('schweizmobil.data_loader.requests.get')
    def test_nothing_written_on_failure(self, mock_get):
        mock_get.side_effect = fake_service(geometry=b'{"features": []}')
        with self.assertRaises(RouteNotFoundError):
            RouteExporter(clock=self.clock).export(self.identifier, output=self.tmp.name)
        self.assertEqual(os.listdir(self.tmp.name), [])

    @patch('schweizmobil.data_loader.requests.get')
    def test_transport_failure_propagates(self, mock_get):
        mock_get.side_effect = requests.ConnectionError("unreachable")
        with self.assertRaises(TransportError):
            RouteExporter(clock=self.clock).export(self.identifier, output=self.tmp.name)
        self.assertEqual(os.listdir(self.tmp.name), [])

    @patch('schweizmobil.data_loader.requests.get')
    def test_map_preview(self, mock_get):
        mock_get.side_effect = fake_service()
        result = RouteExporter(clock=self.clock).export(self.identifier, output=self.tmp.name,
                                                        with_map=True)
        self.assertEqual(result.map_path, result.output_path.with_suffix('.html'))
        self.assertTrue(result.map_path.exists())

    @patch('schweizmobil.data_loader.requests.get')
    def test_map_preview_never_replaces_gpx(self, mock_get):
        mock_get.side_effect = fake_service()
        target = os.path.join(self.tmp.name, "alpina.html")
        result = RouteExporter(clock=self.clock).export(self.identifier, output=target,
                                                        with_map=True)
        self.assertNotEqual(result.map_path, result.output_path)
        self.assertEqual(result.map_path.name, "alpina.html.html")
        with open(result.output_path, encoding='utf-8') as f:
            self.assertTrue(f.read().startswith('<?xml'))
        _, trkpts = read_trkpts(result.output_path)
        self.assertEqual(len(trkpts), 2)


class TestCreateTrackMap(unittest.TestCase):
    def test_writes_html(self):
        with tempfile.TemporaryDirectory() as tmp:
            points = [GeoPoint(*lv03_to_wgs84(600000, 200000)), GeoPoint(*lv03_to_wgs84(601000, 201000))]
            path = create_track_map(points, "Via Alpina", os.path.join(tmp, "map.html"))
            with open(path, encoding='utf-8') as f:
                html = f.read()
            self.assertIn("leaflet", html.lower())
            self.assertIn("Via Alpina", html)

    def test_empty_track(self):
        with tempfile.TemporaryDirectory() as tmp:
            path = create_track_map([], "empty", os.path.join(tmp, "empty.html"))
            self.assertTrue(path.exists())


class TestCommandLine(unittest.TestCase):
    def setUp(self):
        self.tmp = tempfile.TemporaryDirectory()
        self.addCleanup(self.tmp.cleanup)

    @patch('sys.stdout', new_callable=io.StringIO)
    @patch('schweizmobil.data_loader.requests.get')
    def test_success(self, mock_get, mock_stdout):
        mock_get.side_effect = fake_service()
        target = os.path.join(self.tmp.name, "out.gpx")
        code = schweizmobil_gpx.main(["national", "1", target])
        self.assertEqual(code, 0)
        self.assertTrue(os.path.exists(target))
        self.assertIn(f'Route "Via Alpina" saved to {target}', mock_stdout.getvalue())

    @patch('sys.stdout', new_callable=io.StringIO)
    @patch('schweizmobil.data_loader.requests.get')
    def test_no_title_and_directory(self, mock_get, mock_stdout):
        mock_get.side_effect = fake_service()
        code = schweizmobil_gpx.main(["snowshoe-local", "15", self.tmp.name + os.sep, "--no-title"])
        self.assertEqual(code, 0)
        self.assertEqual(os.listdir(self.tmp.name), ["snowshoe-local-15.gpx"])
        mock_get.assert_called_once()

    @patch('schweizmobil.data_loader.requests.get')
    def test_invalid_category(self, mock_get):
        with self.assertLogs('schweizmobil.cli', level='ERROR') as logs:
            code = schweizmobil_gpx.main(["cycling", "1", self.tmp.name])
        self.assertEqual(code, 1)
        self.assertIn("cycling is not <national|regional|local|snowshoe-local>", logs.output[0])
        mock_get.assert_not_called()

    @patch('schweizmobil.data_loader.requests.get')
    def test_invalid_route_number(self, mock_get):
        with self.assertLogs('schweizmobil.cli', level='ERROR') as logs:
            code = schweizmobil_gpx.main(["national", "1a", self.tmp.name])
        self.assertEqual(code, 1)
        self.assertIn("invalid route number: 1a", logs.output[0])
        mock_get.assert_not_called()

    @patch('schweizmobil.data_loader.requests.get')
    def test_service_failure(self, mock_get):
        mock_get.side_effect = fake_service(geometry=b'not json')
        with self.assertLogs('schweizmobil.cli', level='ERROR'):
            code = schweizmobil_gpx.main(["regional", "42", self.tmp.name])
        self.assertEqual(code, 1)
        self.assertEqual(os.listdir(self.tmp.name), [])

    def test_missing_arguments(self):
        with patch('sys.stderr', new_callable=io.StringIO):
            with self.assertRaises(SystemExit) as ctx:
                schweizmobil_gpx.main(["national"])
        self.assertNotEqual(ctx.exception.code, 0)


if __name__ == '__main__':
    unittest.main()
