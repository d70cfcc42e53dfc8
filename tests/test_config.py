import json
import os
import tempfile
import unittest

import yaml

from satvis.config import (
    AntennaConfig,
    ConstellationConfig,
    SignalConfig,
    VisibilityConfig,
    load_config,
)
from satvis.core.constants import FREQ_B3, FREQ_L1
from satvis.core.data_structures import BodyOffset
from satvis.core.errors import NotFoundError, ValidationError


class TestVisibilityConfig(unittest.TestCase):

    def setUp(self):
        self.test_dir = tempfile.mkdtemp()

    def test_defaults(self):
        config = VisibilityConfig()
        self.assertEqual(config.antenna.gain_dbi, 3.0)
        self.assertEqual(config.antenna.offset, BodyOffset(0.0, 0.0, -5.0))
        self.assertEqual(config.signal.minimum_strength_dbm, -130.0)
        self.assertEqual(config.signal.quality_threshold_dbhz, 30.0)
        self.assertEqual(config.max_workers, 1)

    def test_radio_for(self):
        config = VisibilityConfig()
        self.assertEqual(config.radio_for('G05').frequency_hz, FREQ_L1)
        self.assertEqual(config.radio_for('C23').frequency_hz, FREQ_B3)
        self.assertEqual(config.radio_for('B03').name, 'BEIDOU')
        with self.assertRaises(NotFoundError):
            config.radio_for('E11')
        with self.assertRaises(ValidationError):
            config.radio_for('')

    def test_supported_ids_restrict(self):
        gps = ConstellationConfig('GPS', FREQ_L1, 14.3, id_prefixes=['G'],
                                  supported_ids=['G01', 'g02'])
        config = VisibilityConfig(constellations=[gps])
        self.assertIs(config.radio_for('G02'), gps)
        with self.assertRaises(NotFoundError):
            config.radio_for('G03')

    def test_dict_round_trip(self):
        config = VisibilityConfig(antenna=AntennaConfig(BodyOffset(1.0, 0.0, -2.0), 5.0),
                                  signal=SignalConfig(-125.0, 35.0), max_workers=4,
                                  logging={'default_level': 'DEBUG'})
        self.assertEqual(VisibilityConfig.from_dict(config.to_dict()), config)

    def test_partial_dict_keeps_defaults(self):
        config = VisibilityConfig.from_dict({'signal': {'quality_threshold_dbhz': 35.0}})
        self.assertEqual(config.signal.quality_threshold_dbhz, 35.0)
        self.assertEqual(config.signal.minimum_strength_dbm, -130.0)
        self.assertEqual(len(config.constellations), 2)

    def test_invalid_values(self):
        with self.assertRaises(ValidationError):
            VisibilityConfig(max_workers=0)
        with self.assertRaises(ValidationError):
            VisibilityConfig(earth_radius_m=-1.0)
        with self.assertRaises(ValidationError):
            ConstellationConfig('GPS', 0.0, 14.3)
        with self.assertRaises(ValidationError):
            ConstellationConfig.from_dict({'name': 'GPS', 'frequency_hz': FREQ_L1})

    def test_malformed_values(self):
        with self.assertRaises(ValidationError) as ctx:
            ConstellationConfig.from_dict({'name': 'GPS', 'frequency_hz': None,
                                           'transmit_power_dbw': 14.3})
        self.assertEqual(ctx.exception.parameter, 'GPS.frequency_hz')
        with self.assertRaises(ValidationError):
            ConstellationConfig.from_dict({'name': 'GPS', 'frequency_hz': 'L1',
                                           'transmit_power_dbw': 14.3})
        with self.assertRaises(ValidationError):
            ConstellationConfig.from_dict({'frequency_hz': FREQ_L1, 'transmit_power_dbw': 14.3})
        with self.assertRaises(ValidationError):
            VisibilityConfig.from_dict({'signal': {'noise_temperature_k': None}})
        with self.assertRaises(ValidationError):
            VisibilityConfig.from_dict({'antenna': {'offset': [0.0, None, -5.0]}})
        with self.assertRaises(ValidationError):
            VisibilityConfig.from_dict({'antenna': {'offset': [0.0, -5.0]}})

    def test_load_yaml(self):
        path = os.path.join(self.test_dir, 'satvis.yaml')
        with open(path, 'w') as f:
            yaml.safe_dump({
                'constellations': [{'name': 'BEIDOU', 'frequency_hz': 1268520000,
                                    'transmit_power_dbw': 15.0, 'id_prefixes': ['B']}],
                'antenna': {'offset': {'x': 0.0, 'y': 0.0, 'z': -5.0}, 'gain_dbi': 3.0},
                'max_workers': 2,
            }, f)

        config = load_config(path)

        self.assertEqual(config.max_workers, 2)
        self.assertEqual(config.radio_for('B01').transmit_power_dbw, 15.0)
        with self.assertRaises(NotFoundError):
            config.radio_for('G01')

    def test_save_and_load_json(self):
        path = os.path.join(self.test_dir, 'satvis.json')
        config = VisibilityConfig(max_workers=3)
        config.save(path)
        with open(path) as f:
            self.assertEqual(json.load(f)['max_workers'], 3)
        self.assertEqual(load_config(path), config)

    def test_unsupported_format(self):
        with self.assertRaises(ValidationError):
            load_config(os.path.join(self.test_dir, 'satvis.toml'))
        with self.assertRaises(ValidationError):
            VisibilityConfig().save(os.path.join(self.test_dir, 'satvis.ini'))


if __name__ == '__main__':
    unittest.main()
