#!/usr/bin/env python3
from components.work_loads.phone_generator import PhoneConfig, PhoneGenerator, RuleConfig


class WorkLoad:
    def __init__(self, seed=None):
        self.seed = seed

    def numbers(self, num_numbers, special_share=0.0, min_len=6, max_len=12):
        config = PhoneConfig(min_len=min_len, max_len=max_len,
                             special_share=special_share, seed=self.seed)
        return PhoneGenerator(config).batch(num_numbers)

    def rules(self, num_rules, special_share=0.0, prefix_min=1, prefix_max=6,
              shared_target_share=0.2):
        gen = PhoneGenerator(PhoneConfig(special_share=special_share, seed=self.seed))
        rule_config = RuleConfig(prefix_min=prefix_min, prefix_max=prefix_max,
                                 shared_target_share=shared_target_share)
        return gen.rules(num_rules, rule_config)
